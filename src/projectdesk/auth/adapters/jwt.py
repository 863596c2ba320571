"""JWT authentication adapter for externally issued tokens."""

from __future__ import annotations

import jwt
from jwt.exceptions import InvalidTokenError, MissingRequiredClaimError

from ...logging import get_logger
from .base import AuthenticationError, Principal

logger = get_logger(__name__)


class JWTAuthAdapter:
    """Verifies signed JWTs whose ``sub`` claim is the local user id.

    Issuer and audience are only enforced when configured.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str | None = None,
        audience: str | None = None,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience

    def _decode(self, token: str) -> dict:
        return jwt.decode(
            token,
            self.secret_key,
            algorithms=[self.algorithm],
            issuer=self.issuer,
            audience=self.audience,
            options={"require": ["sub"], "verify_aud": self.audience is not None},
        )

    async def verify_token(self, token: str) -> Principal:
        try:
            claims = self._decode(token)
        except MissingRequiredClaimError as e:
            raise AuthenticationError("Missing 'sub' claim in token") from e
        except InvalidTokenError as e:
            logger.warning("Rejected JWT", reason=type(e).__name__)
            raise AuthenticationError("Invalid token") from e

        principal = Principal(provider="jwt", subject=str(claims["sub"]), claims=claims)
        if claims.get("email"):
            principal["email"] = claims["email"]
        return principal
