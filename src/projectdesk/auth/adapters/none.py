"""No-auth adapter for local development without authentication."""

from __future__ import annotations

from ...config import settings
from ...logging import get_logger
from .base import AuthenticationError, Principal

logger = get_logger(__name__)


class NoAuthAdapter:
    """
    No-auth adapter that treats the bearer token as the caller's user name.

    ``Authorization: Bearer admin`` acts as the stored user ``admin``.
    WARNING: Only use this in development environments!
    """

    def __init__(self, environment: str | None = None):
        environment = (environment or settings.environment).lower()
        if environment in ("production", "prod"):
            logger.error(
                "NoAuthAdapter detected in production environment! "
                "This is a security risk and should never be used in production.",
                environment=environment,
            )
            raise RuntimeError(
                "NoAuthAdapter cannot be used in production environments. "
                "Please configure a proper authentication provider."
            )

    async def verify_token(self, token: str) -> Principal:
        """Accept any non-empty token; its content names the user."""
        if not token:
            raise AuthenticationError("Token required (even in no-auth mode)")

        return Principal(provider="none", subject=token, claims={"mode": "development"})
