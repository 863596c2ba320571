"""Authentication context for request handling."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import AuthorizationError
from .adapters.base import Principal


@dataclass(frozen=True)
class AuthContext:
    """Runtime authentication context for a request.

    Resolved once per request and passed explicitly to every resolver.
    """

    user_id: int | None
    tenant_id: int | None
    roles: frozenset[str] = field(default_factory=frozenset)
    principal: Principal | None = None
    token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        """Check if the request is authenticated."""
        return self.user_id is not None and self.principal is not None

    @property
    def provider(self) -> str | None:
        """Get the authentication provider name."""
        return self.principal["provider"] if self.principal else None

    def is_in_role(self, role: str) -> bool:
        return self.is_authenticated and role in self.roles

    def ensure_role(self, role: str) -> None:
        """Raise AuthorizationError unless the caller is a member of ``role``."""
        if not self.is_in_role(role):
            raise AuthorizationError(
                f"Unauthorized. You have to be a member of {role} role to perform this action."
            )

    def require_tenant_id(self) -> int:
        """Return the caller's tenant id, or raise if the caller has none."""
        if not self.is_authenticated or self.tenant_id is None:
            raise AuthorizationError(
                "Unauthorized. This action requires a user that belongs to a tenant."
            )
        return self.tenant_id


ANONYMOUS = AuthContext(user_id=None, tenant_id=None)
