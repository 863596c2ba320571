"""
Tests for resolving the caller context from the Authorization header
"""

import jwt
import pytest

from projectdesk.auth.adapters.base import AuthenticationError
from projectdesk.auth.adapters.jwt import JWTAuthAdapter
from projectdesk.auth.adapters.none import NoAuthAdapter
from projectdesk.auth.context import ANONYMOUS
from projectdesk.auth.middleware import get_auth_context, get_auth_context_optional

SECRET = "test-secret-with-at-least-32-bytes!!"


@pytest.fixture
def jwt_adapter():
    return JWTAuthAdapter(secret_key=SECRET)


def bearer(subject: str) -> str:
    return "Bearer " + jwt.encode({"sub": subject}, SECRET, algorithm="HS256")


class TestGetAuthContext:
    @pytest.mark.asyncio
    async def test_missing_header_is_anonymous(self, seeded):
        assert await get_auth_context(None) is ANONYMOUS

    @pytest.mark.asyncio
    async def test_jwt_subject_loads_user_roles_and_tenant(self, seeded, jwt_adapter):
        context = await get_auth_context(bearer(str(seeded.member_id)), jwt_adapter)

        assert context.user_id == seeded.member_id
        assert context.tenant_id == seeded.tenant_id
        assert context.roles == frozenset({"Member"})
        assert context.is_authenticated
        assert context.provider == "jwt"

    @pytest.mark.asyncio
    async def test_admin_has_no_tenant(self, seeded, jwt_adapter):
        context = await get_auth_context(bearer(str(seeded.admin_id)), jwt_adapter)

        assert context.tenant_id is None
        assert context.is_in_role("HostAdministrator")

    @pytest.mark.asyncio
    async def test_no_auth_subject_is_user_name(self, seeded):
        context = await get_auth_context("Bearer seven", NoAuthAdapter())
        assert context.user_id == seeded.member_id

    @pytest.mark.asyncio
    async def test_malformed_header(self, seeded, jwt_adapter):
        with pytest.raises(AuthenticationError, match="Expected: Bearer"):
            await get_auth_context("Basic abc", jwt_adapter)

    @pytest.mark.asyncio
    async def test_invalid_signature(self, seeded, jwt_adapter):
        token = jwt.encode({"sub": "7"}, "another-secret-with-at-least-32-bytes", algorithm="HS256")
        with pytest.raises(AuthenticationError, match="Invalid token"):
            await get_auth_context(f"Bearer {token}", jwt_adapter)

    @pytest.mark.asyncio
    async def test_unknown_user(self, seeded, jwt_adapter):
        with pytest.raises(AuthenticationError, match="active user"):
            await get_auth_context(bearer("404"), jwt_adapter)


class TestGetAuthContextOptional:
    @pytest.mark.asyncio
    async def test_failure_falls_back_to_anonymous(self, seeded, jwt_adapter):
        context = await get_auth_context_optional("Bearer not-a-jwt", jwt_adapter)
        assert context is ANONYMOUS

    @pytest.mark.asyncio
    async def test_success_passes_through(self, seeded, jwt_adapter):
        context = await get_auth_context_optional(bearer(str(seeded.member_id)), jwt_adapter)
        assert context.user_id == seeded.member_id


class TestJWTAuthAdapter:
    @pytest.mark.asyncio
    async def test_missing_subject(self, jwt_adapter):
        token = jwt.encode({"email": "a@example.com"}, SECRET, algorithm="HS256")
        with pytest.raises(AuthenticationError, match="Missing 'sub' claim"):
            await jwt_adapter.verify_token(token)

    @pytest.mark.asyncio
    async def test_email_claim_is_exposed(self, jwt_adapter):
        token = jwt.encode({"sub": "7", "email": "a@example.com"}, SECRET, algorithm="HS256")
        principal = await jwt_adapter.verify_token(token)

        assert principal["subject"] == "7"
        assert principal["email"] == "a@example.com"
        assert principal["provider"] == "jwt"

    @pytest.mark.asyncio
    async def test_audience_is_enforced_when_configured(self):
        adapter = JWTAuthAdapter(secret_key=SECRET, audience="projectdesk")
        token = jwt.encode({"sub": "7", "aud": "someone-else"}, SECRET, algorithm="HS256")
        with pytest.raises(AuthenticationError, match="Invalid token"):
            await adapter.verify_token(token)
