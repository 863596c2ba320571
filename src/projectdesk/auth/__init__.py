"""Authentication and caller context for projectdesk."""

from .adapters.base import AuthAdapter, AuthenticationError, Principal
from .context import ANONYMOUS, AuthContext
from .factory import get_auth_adapter
from .middleware import get_auth_context, get_auth_context_optional

__all__ = [
    "ANONYMOUS",
    "AuthAdapter",
    "AuthContext",
    "AuthenticationError",
    "Principal",
    "get_auth_adapter",
    "get_auth_context",
    "get_auth_context_optional",
]
