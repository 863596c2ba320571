from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from ...database.connection import get_async_session
from ...database.gateway import EntityGateway, apply_updates
from ...dbmodels import Tenants
from ...logging import get_logger
from ..access_control import authorize
from ..mapping import as_create, as_update
from ..types.tenant import Tenant

if TYPE_CHECKING:
    from ...auth.context import AuthContext
    from ..mutations.root import TenantInput

logger = get_logger(__name__)


# Query resolvers
async def resolve_tenants(auth_context: AuthContext) -> list[Tenant]:
    """List every tenant. Administrators only."""
    authorize("tenants", auth_context)

    async with get_async_session() as session:
        result = await session.execute(select(Tenants).order_by(Tenants.id))
        return [Tenant.from_model(tenant) for tenant in result.scalars().all()]


# Mutation resolvers
async def add_tenant(auth_context: AuthContext, input: TenantInput) -> Tenant:
    """
    Create a new tenant.

    Any id in the input is ignored; the database assigns one on commit.
    """
    authorize("addTenant", auth_context)
    intent = as_create(input, Tenants)

    async with get_async_session() as session:
        gateway = EntityGateway(session)
        tenant = gateway.add(Tenants(**intent.payload))
        await gateway.commit()
        await gateway.refresh(tenant)

        logger.info(
            "Tenant created",
            tenant_id=tenant.id,
            user_id=auth_context.user_id,
            name=tenant.name,
        )
        return Tenant.from_model(tenant)


async def edit_tenant(auth_context: AuthContext, input: TenantInput) -> Tenant:
    """Overwrite an existing tenant's fields from the input."""
    authorize("editTenant", auth_context)
    intent = as_update(input, Tenants)

    async with get_async_session() as session:
        gateway = EntityGateway(session)
        tenant = await gateway.find_by_id(Tenants, intent.entity_id)
        updated_fields = apply_updates(tenant, intent.payload)
        await gateway.commit()
        await gateway.refresh(tenant)

        logger.info(
            "Tenant updated",
            tenant_id=tenant.id,
            user_id=auth_context.user_id,
            updated_fields=updated_fields,
        )
        return Tenant.from_model(tenant)
