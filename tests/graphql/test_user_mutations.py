"""
Tests for the user mutation resolvers
"""

import pytest

from projectdesk.auth.context import ANONYMOUS
from projectdesk.dbmodels import Users
from projectdesk.errors import AuthorizationError, IdentityError, NotFoundError
from projectdesk.graphql.mutations.root import UserInput
from projectdesk.graphql.resolvers.user import (
    add_user,
    edit_user,
    resolve_current_user,
    resolve_users,
)
from projectdesk.identity.hashing import verify_password


class TestAddUser:
    @pytest.mark.asyncio
    async def test_admin_creates_user_with_password(self, admin_context, seeded, load):
        user = await add_user(
            admin_context,
            UserInput(
                user_name="alice",
                email="alice@example.com",
                tenant_id=seeded.tenant_id,
                password="Str0ng!pw",
            ),
        )

        assert user.id > 0
        assert user.tenant_id == seeded.tenant_id
        assert user.has_password is True
        assert user.roles == []
        stored = await load(Users, user.id)
        assert verify_password("Str0ng!pw", stored.password_hash)

    @pytest.mark.asyncio
    async def test_without_password_has_no_credential(self, admin_context, load):
        user = await add_user(admin_context, UserInput(user_name="bob", password=""))

        assert user.has_password is False
        assert (await load(Users, user.id)).password_hash is None

    @pytest.mark.asyncio
    async def test_duplicate_user_name(self, admin_context, count_rows):
        before = await count_rows(Users)

        with pytest.raises(IdentityError, match="^DuplicateUserName: "):
            await add_user(admin_context, UserInput(user_name="seven"))

        assert await count_rows(Users) == before

    @pytest.mark.asyncio
    async def test_weak_password(self, admin_context, count_rows):
        before = await count_rows(Users)

        with pytest.raises(IdentityError) as exc_info:
            await add_user(admin_context, UserInput(user_name="carol", password="abc"))

        assert exc_info.value.code == "PasswordTooShort"
        assert await count_rows(Users) == before

    @pytest.mark.asyncio
    async def test_unknown_tenant(self, admin_context):
        with pytest.raises(NotFoundError, match="Tenant not found: 999"):
            await add_user(admin_context, UserInput(user_name="dave", tenant_id=999))

    @pytest.mark.asyncio
    async def test_member_is_denied_without_writes(self, member_context, count_rows):
        before = await count_rows(Users)

        with pytest.raises(AuthorizationError):
            await add_user(member_context, UserInput(user_name="eve"))

        assert await count_rows(Users) == before


class TestEditUser:
    @pytest.mark.asyncio
    async def test_self_edit_keeps_roles_and_tenant(self, member_context, seeded, load):
        user = await edit_user(
            member_context,
            UserInput(id=seeded.member_id, user_name="seven", display_name="New", tenant_id=99),
        )

        assert user.display_name == "New"
        assert user.roles == ["Member"]
        assert user.tenant_id == seeded.tenant_id
        stored = await load(Users, seeded.member_id)
        assert stored.display_name == "New"
        assert stored.tenant_id == seeded.tenant_id

    @pytest.mark.asyncio
    async def test_editing_someone_else_is_denied(self, member_context, seeded, load):
        with pytest.raises(AuthorizationError):
            await edit_user(
                member_context,
                UserInput(id=seeded.other_member_id, user_name="nine", display_name="Hacked"),
            )

        assert (await load(Users, seeded.other_member_id)).display_name == "Nine"

    @pytest.mark.asyncio
    async def test_admin_edits_any_user(self, admin_context, seeded):
        user = await edit_user(
            admin_context,
            UserInput(id=seeded.other_member_id, user_name="nine", first_name="Nina"),
        )

        assert user.first_name == "Nina"

    @pytest.mark.asyncio
    async def test_weak_password_changes_nothing(self, member_context, seeded, load):
        original = await load(Users, seeded.member_id)

        with pytest.raises(IdentityError) as exc_info:
            await edit_user(
                member_context,
                UserInput(
                    id=seeded.member_id,
                    user_name="seven",
                    display_name="New Name",
                    password="abc",
                ),
            )

        assert str(exc_info.value).startswith("PasswordTooShort: ")
        stored = await load(Users, seeded.member_id)
        assert stored.display_name == "Old Name"
        assert stored.password_hash == original.password_hash

    @pytest.mark.asyncio
    async def test_password_is_replaced(self, member_context, seeded, load):
        user = await edit_user(
            member_context,
            UserInput(id=seeded.member_id, user_name="seven", password="N3w!pass"),
        )

        assert user.has_password is True
        stored = await load(Users, seeded.member_id)
        assert verify_password("N3w!pass", stored.password_hash)
        assert not verify_password("Secret1!", stored.password_hash)

    @pytest.mark.asyncio
    async def test_password_is_added_for_user_without_one(self, admin_context, seeded):
        user = await edit_user(
            admin_context,
            UserInput(id=seeded.other_member_id, user_name="nine", password="N3w!pass"),
        )

        assert user.has_password is True

    @pytest.mark.asyncio
    async def test_taken_user_name_rolls_back_everything(self, member_context, seeded, load):
        with pytest.raises(IdentityError, match="^DuplicateUserName: "):
            await edit_user(
                member_context,
                UserInput(
                    id=seeded.member_id,
                    user_name="nine",
                    display_name="New Name",
                    password="N3w!pass",
                ),
            )

        stored = await load(Users, seeded.member_id)
        assert stored.user_name == "seven"
        assert stored.display_name == "Old Name"
        assert verify_password("Secret1!", stored.password_hash)

    @pytest.mark.asyncio
    async def test_missing_user(self, admin_context):
        with pytest.raises(NotFoundError, match="User not found: 404"):
            await edit_user(admin_context, UserInput(id=404, user_name="ghost"))


class TestUserQueries:
    @pytest.mark.asyncio
    async def test_me(self, member_context, seeded):
        me = await resolve_current_user(member_context)
        assert me.id == seeded.member_id
        assert me.user_name == "seven"

    @pytest.mark.asyncio
    async def test_me_anonymous(self, seeded):
        assert await resolve_current_user(ANONYMOUS) is None

    @pytest.mark.asyncio
    async def test_users_by_tenant(self, admin_context, seeded):
        users = await resolve_users(admin_context, seeded.other_tenant_id)
        assert [u.id for u in users] == [seeded.other_member_id]
