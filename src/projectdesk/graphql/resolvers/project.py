from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from ...database.connection import get_async_session
from ...database.gateway import EntityGateway, apply_updates
from ...dbmodels import Projects
from ...logging import get_logger
from ..access_control import authorize
from ..mapping import as_create, as_update
from ..types.project import Project

if TYPE_CHECKING:
    from ...auth.context import AuthContext
    from ..mutations.root import ProjectInput

logger = get_logger(__name__)


# Query resolvers
async def resolve_projects(auth_context: AuthContext) -> list[Project]:
    """List the projects of the caller's tenant."""
    authorize("projects", auth_context)
    tenant_id = auth_context.require_tenant_id()

    async with get_async_session() as session:
        stmt = select(Projects).where(Projects.tenant_id == tenant_id).order_by(Projects.id)
        result = await session.execute(stmt)
        return [Project.from_model(project) for project in result.scalars().all()]


# Mutation resolvers
async def add_project(auth_context: AuthContext, input: ProjectInput) -> Project:
    """
    Create a new project in the caller's tenant.

    The tenant id in the input is discarded and taken from the caller instead.
    """
    authorize("addProject", auth_context)
    tenant_id = auth_context.require_tenant_id()
    intent = as_create(input, Projects)

    async with get_async_session() as session:
        gateway = EntityGateway(session)
        project = gateway.add(Projects(**intent.payload, tenant_id=tenant_id))
        await gateway.commit()
        await gateway.refresh(project)

        logger.info(
            "Project created",
            project_id=project.id,
            tenant_id=tenant_id,
            user_id=auth_context.user_id,
        )
        return Project.from_model(project)


async def edit_project(auth_context: AuthContext, input: ProjectInput) -> Project:
    """
    Overwrite a project's fields from the input.

    Only projects of the caller's tenant can be found; others are reported as
    not found.
    """
    authorize("editProject", auth_context)
    tenant_id = auth_context.require_tenant_id()
    intent = as_update(input, Projects)

    async with get_async_session() as session:
        gateway = EntityGateway(session)
        project = await gateway.find_by_id(Projects, intent.entity_id, tenant_id=tenant_id)
        updated_fields = apply_updates(project, intent.payload)
        await gateway.commit()
        await gateway.refresh(project)

        logger.info(
            "Project updated",
            project_id=project.id,
            user_id=auth_context.user_id,
            updated_fields=updated_fields,
        )
        return Project.from_model(project)
