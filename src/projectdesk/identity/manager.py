"""
User manager: the credential store consumed by the user mutations.

Every operation returns an IdentityResult instead of raising, so callers decide
when a failure aborts the mutation (see ``IdentityResult.raise_on_error``).
Changes are staged on the caller's session; committing is the caller's job.
"""

from __future__ import annotations

import re

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import Settings
from ..config import settings as default_settings
from ..dbmodels import UserRoles, Users
from ..logging import get_logger
from .hashing import hash_password, verify_password
from .results import ErrorDescriber, IdentityResult
from .validators import PasswordValidator, default_password_validators

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class UserManager:
    """Creates users and manages their credentials and role memberships."""

    def __init__(
        self,
        session: AsyncSession,
        settings: Settings | None = None,
        password_validators: list[PasswordValidator] | None = None,
    ):
        self.session = session
        self.settings = settings or default_settings
        self._password_validators = (
            password_validators
            if password_validators is not None
            else default_password_validators(self.settings)
        )

    @property
    def password_validators(self) -> list[PasswordValidator]:
        return list(self._password_validators)

    # Lookups
    async def find_by_id(self, user_id: int | None) -> Users | None:
        if user_id is None or user_id <= 0:
            return None
        result = await self.session.execute(select(Users).where(Users.id == user_id))
        return result.scalar_one_or_none()

    async def find_by_name(self, user_name: str) -> Users | None:
        stmt = select(Users).where(func.lower(Users.user_name) == user_name.lower())
        # pending edits of the user being validated must not be flushed yet
        with self.session.no_autoflush:
            result = await self.session.execute(stmt)
        return result.scalars().first()

    async def find_by_email(self, email: str) -> Users | None:
        stmt = select(Users).where(func.lower(Users.email) == email.lower())
        with self.session.no_autoflush:
            result = await self.session.execute(stmt)
        return result.scalars().first()

    # Validation
    async def validate_user(self, user: Users) -> IdentityResult:
        """Check user name and e-mail rules against the other stored users."""
        describe = ErrorDescriber
        issues = []

        allowed = self.settings.user_name_allowed_characters
        if not user.user_name or any(c not in allowed for c in user.user_name):
            issues.append(describe.invalid_user_name(user.user_name))
        else:
            owner = await self.find_by_name(user.user_name)
            if owner is not None and owner.id != user.id:
                issues.append(describe.duplicate_user_name(user.user_name))

        if user.email:
            if not EMAIL_PATTERN.match(user.email):
                issues.append(describe.invalid_email(user.email))
            elif self.settings.require_unique_email:
                owner = await self.find_by_email(user.email)
                if owner is not None and owner.id != user.id:
                    issues.append(describe.duplicate_email(user.email))
        elif self.settings.require_unique_email:
            issues.append(describe.invalid_email(user.email))

        if issues:
            return IdentityResult.failed(*issues)
        return IdentityResult.success()

    async def validate_password(self, user: Users | None, password: str) -> IdentityResult:
        """Run every configured password validator and merge their verdicts."""
        results = [
            await validator.validate(self, user, password) for validator in self._password_validators
        ]
        return IdentityResult.combine(results)

    # Mutations
    async def create(self, user: Users, password: str | None = None) -> IdentityResult:
        """Stage a new user, optionally with a credential."""
        results = [await self.validate_user(user)]
        if password is not None:
            results.append(await self.validate_password(user, password))
        result = IdentityResult.combine(results)
        if not result.succeeded:
            logger.info(
                "User creation rejected",
                user_name=user.user_name,
                codes=[issue.code for issue in result.errors],
            )
            return result

        if password is not None:
            user.password_hash = hash_password(password)
        self.session.add(user)
        return result

    async def update(self, user: Users) -> IdentityResult:
        """Validate an already tracked user after its fields were changed."""
        return await self.validate_user(user)

    async def remove_password(self, user: Users) -> IdentityResult:
        user.password_hash = None
        return IdentityResult.success()

    async def add_password(self, user: Users, password: str) -> IdentityResult:
        if user.password_hash:
            return IdentityResult.failed(ErrorDescriber.user_already_has_password())

        result = await self.validate_password(user, password)
        if not result.succeeded:
            return result

        user.password_hash = hash_password(password)
        return result

    async def check_password(self, user: Users, password: str) -> bool:
        if not user.password_hash:
            return False
        return verify_password(password, user.password_hash)

    async def add_to_role(self, user: Users, role_name: str) -> IdentityResult:
        if role_name in user.role_names:
            return IdentityResult.success()
        user.roles.append(UserRoles(role_name=role_name))
        return IdentityResult.success()
