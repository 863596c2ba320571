"""Structured outcomes of credential store operations."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import IdentityError


@dataclass(frozen=True)
class IdentityIssue:
    """One reason an identity operation failed."""

    code: str
    description: str


@dataclass(frozen=True)
class IdentityResult:
    """Success/failure of an identity operation plus the reported issues."""

    succeeded: bool
    errors: tuple[IdentityIssue, ...] = field(default_factory=tuple)

    @classmethod
    def success(cls) -> IdentityResult:
        return cls(succeeded=True)

    @classmethod
    def failed(cls, *errors: IdentityIssue) -> IdentityResult:
        return cls(succeeded=False, errors=tuple(errors))

    @classmethod
    def combine(cls, results: list[IdentityResult]) -> IdentityResult:
        """Merge several results; the combination fails if any of them failed."""
        errors = tuple(issue for result in results for issue in result.errors)
        if all(result.succeeded for result in results):
            return cls.success()
        return cls(succeeded=False, errors=errors)

    def raise_on_error(self) -> None:
        """
        Raise IdentityError for a failed result.

        The first reported issue becomes the message ``"{code}: {description}"``;
        a failure without issues falls back to a generic message.
        """
        if self.succeeded:
            return

        if self.errors:
            first = self.errors[0]
            raise IdentityError(first.code, first.description)
        raise IdentityError()


class ErrorDescriber:
    """Builds the issues reported by the credential store."""

    @staticmethod
    def password_too_short(length: int) -> IdentityIssue:
        return IdentityIssue(
            "PasswordTooShort", f"Passwords must be at least {length} characters."
        )

    @staticmethod
    def password_requires_unique_chars(unique_chars: int) -> IdentityIssue:
        return IdentityIssue(
            "PasswordRequiresUniqueChars",
            f"Passwords must use at least {unique_chars} different characters.",
        )

    @staticmethod
    def password_requires_non_alphanumeric() -> IdentityIssue:
        return IdentityIssue(
            "PasswordRequiresNonAlphanumeric",
            "Passwords must have at least one non alphanumeric character.",
        )

    @staticmethod
    def password_requires_digit() -> IdentityIssue:
        return IdentityIssue(
            "PasswordRequiresDigit", "Passwords must have at least one digit ('0'-'9')."
        )

    @staticmethod
    def password_requires_lower() -> IdentityIssue:
        return IdentityIssue(
            "PasswordRequiresLower", "Passwords must have at least one lowercase ('a'-'z')."
        )

    @staticmethod
    def password_requires_upper() -> IdentityIssue:
        return IdentityIssue(
            "PasswordRequiresUpper", "Passwords must have at least one uppercase ('A'-'Z')."
        )

    @staticmethod
    def password_too_common() -> IdentityIssue:
        return IdentityIssue("PasswordTooCommon", "Passwords must not be a commonly used password.")

    @staticmethod
    def invalid_user_name(user_name: str | None) -> IdentityIssue:
        return IdentityIssue(
            "InvalidUserName",
            f"Username '{user_name or ''}' is invalid, can only contain letters or digits.",
        )

    @staticmethod
    def duplicate_user_name(user_name: str) -> IdentityIssue:
        return IdentityIssue("DuplicateUserName", f"Username '{user_name}' is already taken.")

    @staticmethod
    def invalid_email(email: str | None) -> IdentityIssue:
        return IdentityIssue("InvalidEmail", f"Email '{email or ''}' is invalid.")

    @staticmethod
    def duplicate_email(email: str) -> IdentityIssue:
        return IdentityIssue("DuplicateEmail", f"Email '{email}' is already taken.")

    @staticmethod
    def user_already_has_password() -> IdentityIssue:
        return IdentityIssue("UserAlreadyHasPassword", "User already has a password set.")
