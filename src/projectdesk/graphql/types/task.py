"""
Task GraphQL type definitions
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import Tasks


@strawberry.type
class Task:
    """Task type for GraphQL API."""

    id: int
    tenant_id: int
    project_id: int | None
    title: str
    description: str | None
    due_date: datetime | None
    is_completed: bool
    completion_date: datetime | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, task: Tasks) -> Task:
        return cls(
            id=task.id,
            tenant_id=task.tenant_id,
            project_id=task.project_id,
            title=task.title,
            description=task.description,
            due_date=task.due_date,
            is_completed=task.is_completed,
            completion_date=task.completion_date,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
