"""
Root GraphQL query definitions
"""

import strawberry

from ..access_control import get_auth_context_from_info
from ..types.project import Project
from ..types.task import Task
from ..types.tenant import Tenant
from ..types.user import User


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def me(self, info: strawberry.Info) -> User | None:
        """Get the current authenticated user."""
        from ..resolvers.user import resolve_current_user

        return await resolve_current_user(get_auth_context_from_info(info))

    @strawberry.field
    async def tenants(self, info: strawberry.Info) -> list[Tenant]:
        """List all tenants. Requires the administrator role."""
        from ..resolvers.tenant import resolve_tenants

        return await resolve_tenants(get_auth_context_from_info(info))

    @strawberry.field
    async def users(self, info: strawberry.Info, tenant_id: int | None = None) -> list[User]:
        """List users, optionally of one tenant. Requires the administrator role."""
        from ..resolvers.user import resolve_users

        return await resolve_users(get_auth_context_from_info(info), tenant_id)

    @strawberry.field
    async def projects(self, info: strawberry.Info) -> list[Project]:
        """List the projects of the caller's tenant."""
        from ..resolvers.project import resolve_projects

        return await resolve_projects(get_auth_context_from_info(info))

    @strawberry.field
    async def tasks(self, info: strawberry.Info, project_id: int | None = None) -> list[Task]:
        """List the tasks of the caller's tenant, optionally of one project."""
        from ..resolvers.task import resolve_tasks

        return await resolve_tasks(get_auth_context_from_info(info), project_id)
