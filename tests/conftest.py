"""
Shared pytest fixtures and configuration for all tests.

Database-backed tests run against an in-memory SQLite database wired into the
shared session factory, so resolvers use exactly the code path they use in
production.
"""

import os
from collections.abc import AsyncGenerator, Generator
from dataclasses import dataclass
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy import func, select

from projectdesk.auth.context import AuthContext
from projectdesk.config import settings
from projectdesk.database.connection import (
    create_all,
    get_async_engine,
    get_async_session,
    init_database,
    reset_database,
)
from projectdesk.dbmodels import Projects, Tasks, Tenants, UserRoles, Users
from projectdesk.identity.hashing import hash_password

MEMBER_PASSWORD = "Secret1!"


def make_context(
    user_id: int | None,
    tenant_id: int | None,
    roles: tuple[str, ...] = (),
) -> AuthContext:
    """Build an authenticated caller context."""
    return AuthContext(
        user_id=user_id,
        tenant_id=tenant_id,
        roles=frozenset(roles),
        principal={"provider": "jwt", "subject": str(user_id)},
        token="test-token",
    )


@dataclass
class Seed:
    """Ids of the rows created by the ``seeded`` fixture."""

    admin_id: int = 1
    member_id: int = 7
    other_member_id: int = 9
    tenant_id: int = 3
    other_tenant_id: int = 5
    project_id: int = 11
    other_project_id: int = 12
    task_id: int = 21
    other_task_id: int = 22


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[None, None]:
    """Fresh in-memory database with all tables created."""
    reset_database()
    init_database("sqlite://", force_reinit=True)
    await create_all()
    yield
    await get_async_engine().dispose()
    reset_database()


@pytest_asyncio.fixture
async def seeded(database: None) -> Seed:
    """Two tenants, an administrator, one member per tenant and one project/task each."""
    seed = Seed()
    async with get_async_session() as session:
        session.add_all(
            [
                Tenants(id=seed.tenant_id, name="Tenant Three"),
                Tenants(id=seed.other_tenant_id, name="Tenant Five"),
            ]
        )
        session.add_all(
            [
                Users(
                    id=seed.admin_id,
                    user_name="admin",
                    tenant_id=None,
                    password_hash=hash_password(MEMBER_PASSWORD),
                    roles=[UserRoles(role_name=settings.administrator_role)],
                ),
                Users(
                    id=seed.member_id,
                    user_name="seven",
                    email="seven@example.com",
                    tenant_id=seed.tenant_id,
                    display_name="Old Name",
                    password_hash=hash_password(MEMBER_PASSWORD),
                    roles=[UserRoles(role_name="Member")],
                ),
                Users(
                    id=seed.other_member_id,
                    user_name="nine",
                    tenant_id=seed.other_tenant_id,
                    display_name="Nine",
                    roles=[],
                ),
            ]
        )
        session.add_all(
            [
                Projects(id=seed.project_id, tenant_id=seed.tenant_id, name="Apollo"),
                Projects(id=seed.other_project_id, tenant_id=seed.other_tenant_id, name="Gemini"),
            ]
        )
        session.add_all(
            [
                Tasks(
                    id=seed.task_id,
                    tenant_id=seed.tenant_id,
                    project_id=seed.project_id,
                    title="Write plan",
                ),
                Tasks(
                    id=seed.other_task_id,
                    tenant_id=seed.other_tenant_id,
                    project_id=seed.other_project_id,
                    title="Other tenant task",
                ),
            ]
        )
    return seed


@pytest.fixture
def admin_context(seeded: Seed) -> AuthContext:
    return make_context(seeded.admin_id, None, (settings.administrator_role,))


@pytest.fixture
def member_context(seeded: Seed) -> AuthContext:
    return make_context(seeded.member_id, seeded.tenant_id, ("Member",))


@pytest.fixture
def other_member_context(seeded: Seed) -> AuthContext:
    return make_context(seeded.other_member_id, seeded.other_tenant_id)


async def _count_rows(model: Any) -> int:
    async with get_async_session() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()


async def _load(model: Any, entity_id: int) -> Any:
    async with get_async_session() as session:
        result = await session.execute(select(model).where(model.id == entity_id))
        return result.scalar_one_or_none()


@pytest.fixture
def count_rows():
    """Count the stored rows of a model."""
    return _count_rows


@pytest.fixture
def load():
    """Load one stored row by id in a fresh session (None if absent)."""
    return _load


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def caller():
    """Factory for authenticated caller contexts."""
    return make_context
