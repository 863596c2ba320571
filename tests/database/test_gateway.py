"""
Tests for the persistence gateway
"""

import pytest

from projectdesk.database.connection import get_async_session
from projectdesk.database.gateway import EntityGateway, apply_updates, entity_label
from projectdesk.dbmodels import Projects, Tasks, Tenants, Users
from projectdesk.errors import NotFoundError, StorageError


def test_entity_label():
    assert entity_label(Tasks) == "Task"
    assert entity_label(Users) == "User"


class TestApplyUpdates:
    def test_copies_changed_columns_only(self):
        project = Projects(id=11, tenant_id=3, name="Apollo", description=None)

        changed = apply_updates(project, {"name": "Apollo", "description": "Moon"})

        assert changed == ["description"]
        assert project.description == "Moon"

    def test_protected_fields_are_never_copied(self):
        project = Projects(id=11, tenant_id=3, name="Apollo")

        changed = apply_updates(project, {"id": 99, "tenant_id": 5, "name": "Artemis"})

        assert changed == ["name"]
        assert project.id == 11
        assert project.tenant_id == 3

    def test_unknown_keys_are_ignored(self):
        project = Projects(id=11, tenant_id=3, name="Apollo")

        assert apply_updates(project, {"owner": "nobody"}) == []

    def test_custom_exclusions(self):
        user = Users(id=7, user_name="seven", password_hash="hash")

        apply_updates(user, {"password_hash": "other"}, exclude={"password_hash"})

        assert user.password_hash == "hash"


class TestLookup:
    @pytest.mark.asyncio
    async def test_find_existing(self, seeded):
        async with get_async_session() as session:
            tenant = await EntityGateway(session).find_by_id(Tenants, seeded.tenant_id)
            assert tenant.name == "Tenant Three"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("entity_id", [None, 0, -1, 424242])
    async def test_missing_ids_raise_not_found(self, seeded, entity_id):
        async with get_async_session() as session:
            with pytest.raises(NotFoundError) as exc_info:
                await EntityGateway(session).find_by_id(Tasks, entity_id)

        assert exc_info.value.entity == "Task"
        assert str(exc_info.value) == f"Task not found: {entity_id}"

    @pytest.mark.asyncio
    async def test_tenant_filter_hides_other_tenants(self, seeded):
        async with get_async_session() as session:
            gateway = EntityGateway(session)
            foreign = await gateway.get_by_id(
                Projects, seeded.other_project_id, tenant_id=seeded.tenant_id
            )
            own = await gateway.get_by_id(Projects, seeded.project_id, tenant_id=seeded.tenant_id)

        assert foreign is None
        assert own is not None


class TestCommit:
    @pytest.mark.asyncio
    async def test_commit_assigns_id(self, seeded):
        async with get_async_session() as session:
            gateway = EntityGateway(session)
            tenant = gateway.add(Tenants(name="Acme"))
            await gateway.commit()
            await gateway.refresh(tenant)

        assert tenant.id > 0
        assert tenant.is_active is True
        assert tenant.created_at is not None

    @pytest.mark.asyncio
    async def test_constraint_violation_becomes_storage_error(self, seeded, count_rows):
        before = await count_rows(Users)

        with pytest.raises(StorageError, match="Storage constraint violated"):
            async with get_async_session() as session:
                gateway = EntityGateway(session)
                gateway.add(Users(user_name="seven", roles=[]))
                await gateway.commit()

        assert await count_rows(Users) == before
