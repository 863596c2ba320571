from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import select

from ...database.connection import get_async_session
from ...database.gateway import EntityGateway, apply_updates
from ...dbmodels import Projects, Tasks
from ...logging import get_logger
from ..access_control import authorize
from ..mapping import as_create, as_update
from ..types.task import Task

if TYPE_CHECKING:
    from ...auth.context import AuthContext
    from ..mutations.root import TaskInput

logger = get_logger(__name__)


def _sync_completion_date(task: Tasks, payload: dict) -> bool:
    """Stamp or clear completion_date when only the completion flag was sent.

    Returns True if completion_date changed.
    """
    if "is_completed" not in payload or "completion_date" in payload:
        return False
    previous = task.completion_date
    if task.is_completed and task.completion_date is None:
        task.completion_date = datetime.now(UTC)
    elif not task.is_completed:
        task.completion_date = None
    return task.completion_date != previous


# Query resolvers
async def resolve_tasks(auth_context: AuthContext, project_id: int | None = None) -> list[Task]:
    """List the tasks of the caller's tenant, optionally of one project."""
    authorize("tasks", auth_context)
    tenant_id = auth_context.require_tenant_id()

    async with get_async_session() as session:
        stmt = select(Tasks).where(Tasks.tenant_id == tenant_id)
        if project_id is not None:
            stmt = stmt.where(Tasks.project_id == project_id)
        result = await session.execute(stmt.order_by(Tasks.id))
        return [Task.from_model(task) for task in result.scalars().all()]


# Mutation resolvers
async def add_task(auth_context: AuthContext, input: TaskInput) -> Task:
    """
    Create a new task in the caller's tenant.

    The tenant id in the input is discarded and taken from the caller instead.
    A referenced project must belong to the same tenant.
    """
    authorize("addTask", auth_context)
    tenant_id = auth_context.require_tenant_id()
    intent = as_create(input, Tasks)

    async with get_async_session() as session:
        gateway = EntityGateway(session)
        if intent.payload.get("project_id") is not None:
            await gateway.find_by_id(Projects, intent.payload["project_id"], tenant_id=tenant_id)

        task = Tasks(**intent.payload, tenant_id=tenant_id)
        _sync_completion_date(task, intent.payload)
        gateway.add(task)
        await gateway.commit()
        await gateway.refresh(task)

        logger.info(
            "Task created",
            task_id=task.id,
            project_id=task.project_id,
            tenant_id=tenant_id,
            user_id=auth_context.user_id,
        )
        return Task.from_model(task)


async def edit_task(auth_context: AuthContext, input: TaskInput) -> Task:
    """
    Overwrite a task's fields from the input.

    Only tasks of the caller's tenant can be found; others are reported as
    not found.
    """
    authorize("editTask", auth_context)
    tenant_id = auth_context.require_tenant_id()
    intent = as_update(input, Tasks)

    async with get_async_session() as session:
        gateway = EntityGateway(session)
        task = await gateway.find_by_id(Tasks, intent.entity_id, tenant_id=tenant_id)

        new_project_id = intent.payload.get("project_id")
        if new_project_id is not None and new_project_id != task.project_id:
            await gateway.find_by_id(Projects, new_project_id, tenant_id=tenant_id)

        updated_fields = apply_updates(task, intent.payload)
        if _sync_completion_date(task, intent.payload):
            updated_fields.append("completion_date")
        await gateway.commit()
        await gateway.refresh(task)

        logger.info(
            "Task updated",
            task_id=task.id,
            user_id=auth_context.user_id,
            updated_fields=updated_fields,
        )
        return Task.from_model(task)
