"""
Persistence gateway: entity lookup, field updates and the unit-of-work commit.

Resolvers never talk to the session directly for these three concerns, so the
not-found and constraint-violation behaviour is identical for every entity.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Base
from ..errors import NotFoundError, StorageError
from ..logging import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# Identity and relational fields that field-level updates never touch
PROTECTED_FIELDS = frozenset({"id", "tenant_id", "created_at", "updated_at"})


def entity_label(model: type[Base]) -> str:
    """Human-readable singular name of a model, e.g. ``Tasks`` -> ``Task``."""
    return model.__name__.removesuffix("s")


def apply_updates(
    existing: Base,
    payload: Mapping[str, Any],
    exclude: Iterable[str] = PROTECTED_FIELDS,
) -> list[str]:
    """
    Copy payload fields onto an existing entity.

    Only keys that are mapped columns of the entity are copied; keys listed in
    ``exclude`` are skipped. Returns the names of fields whose value changed.
    """
    excluded = frozenset(exclude)
    columns = existing.__mapper__.columns.keys()
    changed: list[str] = []
    for field, value in payload.items():
        if field in excluded or field not in columns:
            continue
        if getattr(existing, field) != value:
            setattr(existing, field, value)
            changed.append(field)
    return changed


class EntityGateway:
    """Unit of work over one request-scoped session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(
        self,
        model: type[ModelT],
        entity_id: int | None,
        tenant_id: int | None = None,
    ) -> ModelT | None:
        """Return the entity with ``entity_id`` or None.

        When ``tenant_id`` is given the lookup only matches rows of that tenant.
        """
        if entity_id is None or entity_id <= 0:
            return None

        stmt = select(model).where(model.id == entity_id)  # type: ignore[attr-defined]
        if tenant_id is not None:
            stmt = stmt.where(model.tenant_id == tenant_id)  # type: ignore[attr-defined]

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_id(
        self,
        model: type[ModelT],
        entity_id: int | None,
        tenant_id: int | None = None,
    ) -> ModelT:
        """Return the entity with ``entity_id`` or raise NotFoundError."""
        entity = await self.get_by_id(model, entity_id, tenant_id=tenant_id)
        if entity is None:
            logger.info(
                "Entity not found",
                entity=entity_label(model),
                entity_id=entity_id,
                tenant_id=tenant_id,
            )
            raise NotFoundError(entity_label(model), entity_id)
        return entity

    def add(self, entity: ModelT) -> ModelT:
        """Stage a new entity for insertion."""
        self.session.add(entity)
        return entity

    async def commit(self) -> None:
        """Flush and commit every staged change as one unit.

        Raises:
            StorageError: If the database rejects the changes
        """
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning("Commit rejected by storage constraint", error=str(e.orig))
            raise StorageError(f"Storage constraint violated: {e.orig}") from e

    async def refresh(self, entity: ModelT) -> ModelT:
        """Reload an entity so database-assigned values (id, timestamps) are visible."""
        await self.session.refresh(entity)
        return entity
