"""Factory for creating auth adapters based on configuration."""

from __future__ import annotations

from ..config import Settings
from ..config import settings as default_settings
from .adapters.base import AuthAdapter
from .adapters.jwt import JWTAuthAdapter
from .adapters.none import NoAuthAdapter


def get_auth_adapter(settings: Settings | None = None) -> AuthAdapter:
    """Create and return the configured auth adapter."""
    settings = settings or default_settings
    provider = settings.auth_provider
    config = settings.auth_config or {}

    if provider == "none":
        return NoAuthAdapter(environment=settings.environment)

    elif provider == "jwt":
        secret_key = config.get("secret_key") or settings.jwt_secret
        if not secret_key:
            raise ValueError(
                "JWT secret key is required. Set PROJECTDESK_JWT_SECRET or provide in config."
            )

        return JWTAuthAdapter(
            secret_key=secret_key,
            algorithm=config.get("algorithm", settings.jwt_algorithm),
            issuer=config.get("issuer"),
            audience=config.get("audience"),
        )

    else:
        raise ValueError(f"Unsupported auth provider: {provider}")
