"""Password validators consulted before a credential is created or replaced."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from ..config import Settings
from .results import ErrorDescriber, IdentityResult

if TYPE_CHECKING:
    from ..dbmodels import Users
    from .manager import UserManager


class PasswordValidator(Protocol):
    """Checks a candidate password for a user."""

    async def validate(
        self, manager: UserManager, user: Users | None, password: str
    ) -> IdentityResult: ...


class PasswordPolicyValidator:
    """Length and character-class policy."""

    def __init__(
        self,
        required_length: int = 6,
        required_unique_chars: int = 1,
        require_digit: bool = True,
        require_lowercase: bool = True,
        require_uppercase: bool = True,
        require_non_alphanumeric: bool = True,
    ):
        self.required_length = required_length
        self.required_unique_chars = required_unique_chars
        self.require_digit = require_digit
        self.require_lowercase = require_lowercase
        self.require_uppercase = require_uppercase
        self.require_non_alphanumeric = require_non_alphanumeric

    @classmethod
    def from_settings(cls, settings: Settings) -> PasswordPolicyValidator:
        return cls(
            required_length=settings.password_required_length,
            required_unique_chars=settings.password_required_unique_chars,
            require_digit=settings.password_require_digit,
            require_lowercase=settings.password_require_lowercase,
            require_uppercase=settings.password_require_uppercase,
            require_non_alphanumeric=settings.password_require_non_alphanumeric,
        )

    async def validate(
        self, manager: UserManager, user: Users | None, password: str
    ) -> IdentityResult:
        _ = manager, user
        describe = ErrorDescriber
        issues = []

        if len(password) < self.required_length:
            issues.append(describe.password_too_short(self.required_length))
        # ASCII classes only, matching the wording of the error descriptions
        if self.require_non_alphanumeric and all(
            ("0" <= c <= "9") or ("a" <= c <= "z") or ("A" <= c <= "Z") for c in password
        ):
            issues.append(describe.password_requires_non_alphanumeric())
        if self.require_digit and not any("0" <= c <= "9" for c in password):
            issues.append(describe.password_requires_digit())
        if self.require_lowercase and not any("a" <= c <= "z" for c in password):
            issues.append(describe.password_requires_lower())
        if self.require_uppercase and not any("A" <= c <= "Z" for c in password):
            issues.append(describe.password_requires_upper())
        if self.required_unique_chars >= 1 and len(set(password)) < self.required_unique_chars:
            issues.append(describe.password_requires_unique_chars(self.required_unique_chars))

        if issues:
            return IdentityResult.failed(*issues)
        return IdentityResult.success()


class PasswordBlocklistValidator:
    """Rejects passwords found on a configured blocklist (case-insensitive)."""

    def __init__(self, blocklist: list[str]):
        self.blocklist = frozenset(entry.lower() for entry in blocklist)

    async def validate(
        self, manager: UserManager, user: Users | None, password: str
    ) -> IdentityResult:
        _ = manager, user
        if password.lower() in self.blocklist:
            return IdentityResult.failed(ErrorDescriber.password_too_common())
        return IdentityResult.success()


def default_password_validators(settings: Settings) -> list[PasswordValidator]:
    """Build the validator chain configured in settings."""
    validators: list[PasswordValidator] = [PasswordPolicyValidator.from_settings(settings)]
    if settings.password_blocklist:
        validators.append(PasswordBlocklistValidator(settings.password_blocklist))
    return validators
