"""Resolution of the caller context from request headers."""

from __future__ import annotations

from sqlalchemy import select

from ..database.connection import get_async_session
from ..dbmodels import Users
from ..logging import get_logger
from .adapters.base import AuthAdapter, AuthenticationError, Principal
from .context import ANONYMOUS, AuthContext
from .factory import get_auth_adapter

logger = get_logger(__name__)


async def load_user_for_principal(principal: Principal) -> Users | None:
    """Find the stored user a verified principal refers to.

    JWT subjects carry the numeric user id; in no-auth mode the subject is the
    user name.
    """
    subject = principal["subject"]
    async with get_async_session() as session:
        if principal["provider"] == "jwt":
            if not subject.isdigit():
                return None
            stmt = select(Users).where(Users.id == int(subject))
        else:
            stmt = select(Users).where(Users.user_name == subject)

        result = await session.execute(stmt)
        return result.scalar_one_or_none()


async def get_auth_context(
    authorization: str | None,
    adapter: AuthAdapter | None = None,
) -> AuthContext:
    """
    Build the AuthContext for a request.

    This function:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies the token with the configured auth adapter
    3. Loads the caller's user record, roles and tenant

    Raises:
        AuthenticationError: If the header is malformed, the token is invalid,
            or the token names no active user
    """
    if not authorization:
        return ANONYMOUS

    if not authorization.startswith("Bearer "):
        raise AuthenticationError("Invalid authorization format. Expected: Bearer <token>")

    token = authorization[7:]
    if not token:
        raise AuthenticationError("Empty token")

    adapter = adapter or get_auth_adapter()
    principal = await adapter.verify_token(token)

    user = await load_user_for_principal(principal)
    if user is None or not user.is_active:
        raise AuthenticationError("Token does not belong to an active user")

    logger.debug(
        "Caller resolved",
        user_id=user.id,
        tenant_id=user.tenant_id,
        provider=principal["provider"],
    )

    return AuthContext(
        user_id=user.id,
        tenant_id=user.tenant_id,
        roles=user.role_names,
        principal=principal,
        token=token,
    )


async def get_auth_context_optional(
    authorization: str | None,
    adapter: AuthAdapter | None = None,
) -> AuthContext:
    """
    Optional authentication - returns the anonymous context if auth fails.

    Use this where unauthenticated callers are rejected later by role checks.
    """
    try:
        return await get_auth_context(authorization, adapter)
    except AuthenticationError as e:
        logger.warning("Authentication failed", error=str(e))
        return ANONYMOUS
