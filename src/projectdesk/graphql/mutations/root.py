"""
Root GraphQL mutation definitions
"""

from datetime import datetime

import strawberry

from ..access_control import get_auth_context_from_info
from ..types.project import Project
from ..types.task import Task
from ..types.tenant import Tenant
from ..types.user import User


# Input types for mutations. Each input serves both the add and the edit
# mutation: ``id`` is ignored on add and required on edit. Optional fields left
# out of the payload keep their stored value; an explicit null clears them.
@strawberry.input
class TenantInput:
    """Input for creating or editing a tenant."""

    name: str
    id: int | None = None
    is_active: bool | None = strawberry.UNSET


@strawberry.input
class UserInput:
    """Input for creating or editing a user."""

    user_name: str
    id: int | None = None
    email: str | None = strawberry.UNSET
    first_name: str | None = strawberry.UNSET
    last_name: str | None = strawberry.UNSET
    display_name: str | None = strawberry.UNSET
    is_active: bool | None = strawberry.UNSET
    tenant_id: int | None = strawberry.UNSET
    password: str | None = None


@strawberry.input
class ProjectInput:
    """Input for creating or editing a project. ``tenant_id`` is always ignored."""

    name: str
    id: int | None = None
    description: str | None = strawberry.UNSET
    tenant_id: int | None = strawberry.UNSET


@strawberry.input
class TaskInput:
    """Input for creating or editing a task. ``tenant_id`` is always ignored."""

    title: str
    id: int | None = None
    project_id: int | None = strawberry.UNSET
    description: str | None = strawberry.UNSET
    due_date: datetime | None = strawberry.UNSET
    is_completed: bool | None = strawberry.UNSET
    completion_date: datetime | None = strawberry.UNSET
    tenant_id: int | None = strawberry.UNSET


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Tenant mutations
    @strawberry.mutation(name="addTenant")
    async def add_tenant(self, info: strawberry.Info, tenant: TenantInput) -> Tenant:
        """Create a tenant. Requires the administrator role."""
        from ..resolvers.tenant import add_tenant

        return await add_tenant(get_auth_context_from_info(info), tenant)

    @strawberry.mutation(name="editTenant")
    async def edit_tenant(self, info: strawberry.Info, tenant: TenantInput) -> Tenant:
        """Overwrite an existing tenant. Requires the administrator role."""
        from ..resolvers.tenant import edit_tenant

        return await edit_tenant(get_auth_context_from_info(info), tenant)

    # User mutations
    @strawberry.mutation(name="addUser")
    async def add_user(self, info: strawberry.Info, user: UserInput) -> User:
        """Create a user, with a password when one is given."""
        from ..resolvers.user import add_user

        return await add_user(get_auth_context_from_info(info), user)

    @strawberry.mutation(name="editUser")
    async def edit_user(self, info: strawberry.Info, user: UserInput) -> User:
        """Edit a user. Administrators may edit anyone, other users only themselves."""
        from ..resolvers.user import edit_user

        return await edit_user(get_auth_context_from_info(info), user)

    # Project mutations
    @strawberry.mutation(name="addProject")
    async def add_project(self, info: strawberry.Info, project: ProjectInput) -> Project:
        """Create a project in the caller's tenant."""
        from ..resolvers.project import add_project

        return await add_project(get_auth_context_from_info(info), project)

    @strawberry.mutation(name="editProject")
    async def edit_project(self, info: strawberry.Info, project: ProjectInput) -> Project:
        """Overwrite a project of the caller's tenant."""
        from ..resolvers.project import edit_project

        return await edit_project(get_auth_context_from_info(info), project)

    # Task mutations
    @strawberry.mutation(name="addTask")
    async def add_task(self, info: strawberry.Info, task: TaskInput) -> Task:
        """Create a task in the caller's tenant."""
        from ..resolvers.task import add_task

        return await add_task(get_auth_context_from_info(info), task)

    @strawberry.mutation(name="editTask")
    async def edit_task(self, info: strawberry.Info, task: TaskInput) -> Task:
        """Overwrite a task of the caller's tenant."""
        from ..resolvers.task import edit_task

        return await edit_task(get_auth_context_from_info(info), task)
