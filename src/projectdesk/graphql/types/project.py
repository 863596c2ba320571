"""
Project GraphQL type definitions
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import Projects


@strawberry.type
class Project:
    """Project type for GraphQL API."""

    id: int
    tenant_id: int
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, project: Projects) -> Project:
        return cls(
            id=project.id,
            tenant_id=project.tenant_id,
            name=project.name,
            description=project.description,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )
