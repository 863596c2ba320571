"""
User GraphQL type definitions
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import Users


@strawberry.type
class User:
    """User type for GraphQL API. The credential itself is never exposed."""

    id: int
    tenant_id: int | None
    user_name: str
    email: str | None
    first_name: str | None
    last_name: str | None
    display_name: str | None
    is_active: bool
    roles: list[str]
    has_password: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, user: Users) -> User:
        return cls(
            id=user.id,
            tenant_id=user.tenant_id,
            user_name=user.user_name,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            display_name=user.display_name,
            is_active=user.is_active,
            roles=sorted(user.role_names),
            has_password=bool(user.password_hash),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
