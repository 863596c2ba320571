"""
Error taxonomy shared by resolvers, the credential store and the persistence gateway.

Every error carries a human-readable message; strawberry surfaces ``str(error)``
in the GraphQL ``errors`` array.
"""

from __future__ import annotations

from typing import Any


class ProjectDeskError(Exception):
    """Base class for all errors surfaced to API callers."""


class AuthorizationError(ProjectDeskError):
    """Raised when the caller lacks a required role or does not own the record."""


class IdentityError(ProjectDeskError):
    """Raised when a credential store operation fails."""

    fallback_message = "Identity error"

    def __init__(self, code: str | None = None, description: str | None = None):
        self.code = code
        self.description = description
        if code is None:
            message = self.fallback_message
        else:
            message = f"{code}: {description}"
        super().__init__(message)


class NotFoundError(ProjectDeskError):
    """Raised when an edit targets an entity that does not exist."""

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class StorageError(ProjectDeskError):
    """Raised when committing a unit of work violates a storage constraint."""
