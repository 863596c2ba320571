"""Credential store: user manager, password validators and identity results."""

from .manager import UserManager
from .results import ErrorDescriber, IdentityIssue, IdentityResult
from .validators import (
    PasswordBlocklistValidator,
    PasswordPolicyValidator,
    PasswordValidator,
    default_password_validators,
)

__all__ = [
    "ErrorDescriber",
    "IdentityIssue",
    "IdentityResult",
    "PasswordBlocklistValidator",
    "PasswordPolicyValidator",
    "PasswordValidator",
    "UserManager",
    "default_password_validators",
]
