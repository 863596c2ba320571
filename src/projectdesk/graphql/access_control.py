"""
Shared access control logic for GraphQL resolvers.

Authorization is declared per operation in ``MUTATION_POLICIES`` and checked
by ``authorize`` before a resolver touches the database.
"""

from collections.abc import Callable

import strawberry

from ..auth.context import ANONYMOUS, AuthContext
from ..config import settings
from ..errors import AuthorizationError
from ..logging import get_logger

logger = get_logger(__name__)


def get_auth_context_from_info(info: strawberry.Info) -> AuthContext:
    """
    Extract the caller context resolved by the GraphQL context getter.

    Returns the anonymous context if none was attached.
    """
    context = info.context
    auth = context.get("auth") if isinstance(context, dict) else None
    if auth is None:
        logger.error("Auth context not found in GraphQL context")
        return ANONYMOUS
    return auth


def is_host_administrator(caller: AuthContext) -> bool:
    return caller.is_in_role(settings.administrator_role)


def is_self(caller: AuthContext, target_id: int | None = None) -> bool:
    return caller.is_authenticated and target_id is not None and caller.user_id == target_id


def require_host_administrator(caller: AuthContext, target_id: int | None = None) -> None:
    _ = target_id
    caller.ensure_role(settings.administrator_role)


def require_self_or_host_administrator(caller: AuthContext, target_id: int | None = None) -> None:
    if is_host_administrator(caller) or is_self(caller, target_id):
        return
    raise AuthorizationError(
        f"Unauthorized. You have to be a member of {settings.administrator_role} role"
        " to be able to edit any user, otherwise you can only edit"
        f" your own user (id: {caller.user_id})."
    )


def require_tenant_member(caller: AuthContext, target_id: int | None = None) -> None:
    _ = target_id
    caller.require_tenant_id()


# Each policy raises AuthorizationError when the caller may not run the operation
Policy = Callable[[AuthContext, int | None], None]

MUTATION_POLICIES: dict[str, Policy] = {
    "addTenant": require_host_administrator,
    "editTenant": require_host_administrator,
    "addUser": require_host_administrator,
    "editUser": require_self_or_host_administrator,
    "addProject": require_tenant_member,
    "editProject": require_tenant_member,
    "addTask": require_tenant_member,
    "editTask": require_tenant_member,
    # Queries
    "tenants": require_host_administrator,
    "users": require_host_administrator,
    "projects": require_tenant_member,
    "tasks": require_tenant_member,
}


def authorize(operation: str, caller: AuthContext, target_id: int | None = None) -> None:
    """
    Enforce the policy registered for ``operation``.

    Raises:
        AuthorizationError: If the caller does not satisfy the policy
        KeyError: If no policy is registered for the operation
    """
    policy = MUTATION_POLICIES[operation]
    try:
        policy(caller, target_id)
    except AuthorizationError:
        logger.info(
            "Access denied",
            operation=operation,
            caller_id=caller.user_id,
            target_id=target_id,
        )
        raise
