from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from ...database.connection import get_async_session
from ...database.gateway import PROTECTED_FIELDS, EntityGateway, apply_updates
from ...dbmodels import Tenants, Users
from ...identity import UserManager
from ...logging import get_logger
from ..access_control import authorize
from ..mapping import as_create, as_update
from ..types.user import User

if TYPE_CHECKING:
    from ...auth.context import AuthContext
    from ..mutations.root import UserInput

logger = get_logger(__name__)

# Administrators place new users in a tenant; the credential only changes
# through the password branch.
CREATE_EXCLUDED_FIELDS = (PROTECTED_FIELDS - {"tenant_id"}) | {"password_hash"}
UPDATE_EXCLUDED_FIELDS = PROTECTED_FIELDS | {"password_hash"}


# Query resolvers
async def resolve_current_user(auth_context: AuthContext) -> User | None:
    """Return the caller's own user record, or None when unauthenticated."""
    if not auth_context.is_authenticated:
        return None

    async with get_async_session() as session:
        user = await EntityGateway(session).get_by_id(Users, auth_context.user_id)
        return User.from_model(user) if user else None


async def resolve_users(auth_context: AuthContext, tenant_id: int | None = None) -> list[User]:
    """List users, optionally of one tenant. Administrators only."""
    authorize("users", auth_context)

    async with get_async_session() as session:
        stmt = select(Users)
        if tenant_id is not None:
            stmt = stmt.where(Users.tenant_id == tenant_id)
        result = await session.execute(stmt.order_by(Users.id))
        return [User.from_model(user) for user in result.scalars().all()]


# Mutation resolvers
async def add_user(auth_context: AuthContext, input: UserInput) -> User:
    """
    Create a new user.

    Without a password the user is created without a credential. Identity
    failures (duplicate user name, weak password) raise IdentityError.
    """
    authorize("addUser", auth_context)
    intent = as_create(input, Users, exclude=CREATE_EXCLUDED_FIELDS)
    password = input.password or None

    async with get_async_session() as session:
        gateway = EntityGateway(session)
        manager = UserManager(session)

        if intent.payload.get("tenant_id") is not None:
            await gateway.find_by_id(Tenants, intent.payload["tenant_id"])

        user = Users(**intent.payload, roles=[])
        result = await manager.create(user, password)
        result.raise_on_error()

        await gateway.commit()
        await gateway.refresh(user)

        logger.info(
            "User created",
            created_user_id=user.id,
            tenant_id=user.tenant_id,
            user_id=auth_context.user_id,
            with_password=password is not None,
        )
        return User.from_model(user)


async def edit_user(auth_context: AuthContext, input: UserInput) -> User:
    """
    Edit an existing user.

    A new password is validated before anything is changed, so a rejected
    password leaves the user untouched. Field updates and the credential swap
    share one commit: if any step fails, nothing is persisted.
    """
    authorize("editUser", auth_context, target_id=input.id)
    intent = as_update(input, Users, exclude=UPDATE_EXCLUDED_FIELDS)
    password = input.password or None

    async with get_async_session() as session:
        gateway = EntityGateway(session)
        manager = UserManager(session)

        user = await gateway.find_by_id(Users, intent.entity_id)

        if password is not None:
            for validator in manager.password_validators:
                (await validator.validate(manager, user, password)).raise_on_error()

        updated_fields = apply_updates(user, intent.payload, exclude=UPDATE_EXCLUDED_FIELDS)
        (await manager.update(user)).raise_on_error()

        if password is not None:
            (await manager.remove_password(user)).raise_on_error()
            (await manager.add_password(user, password)).raise_on_error()

        await gateway.commit()
        await gateway.refresh(user)

        logger.info(
            "User updated",
            edited_user_id=user.id,
            user_id=auth_context.user_id,
            updated_fields=updated_fields,
            password_changed=password is not None,
        )
        return User.from_model(user)
