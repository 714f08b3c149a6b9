"""
Tests for the Prisma-backed role store.
"""

import asyncio
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest

from dialogue_api.shared.permissions.exceptions import RoleLookupError
from dialogue_api.shared.permissions.models import Permission, RoleName
from dialogue_api.shared.permissions.store import PrismaRoleStore


def make_user_role(user_id: str, role_name: str, permissions: list) -> SimpleNamespace:
    """UserRole row with its Role included, as returned by Prisma."""
    return SimpleNamespace(
        id=f"ur-{role_name.lower()}",
        userId=user_id,
        roleId=f"role-{role_name.lower()}",
        assignedBy="system_init",
        createdAt=datetime(2024, 1, 15, 9, 0, 0),
        role=SimpleNamespace(
            id=f"role-{role_name.lower()}",
            name=role_name,
            permissions=permissions,
        ),
    )


@pytest.fixture
def mock_db() -> Mock:
    db = Mock()
    db.userrole.find_many = AsyncMock()
    return db


class TestPrismaRoleStore:
    @pytest.mark.asyncio
    async def test_lists_roles_for_user(self, mock_db: Mock):
        mock_db.userrole.find_many.return_value = [
            make_user_role("user_1", "USER", ["CREATE_DIALOGUE", "EDIT_DIALOGUE"]),
            make_user_role("user_1", "MODERATOR", ["PUBLISH_DIALOGUE"]),
        ]
        store = PrismaRoleStore(mock_db)

        roles = await store.list_roles_for_user("user_1")

        assert [r.role_name for r in roles] == [RoleName.USER, RoleName.MODERATOR]
        assert roles[0].permissions == frozenset(
            {Permission.CREATE_DIALOGUE, Permission.EDIT_DIALOGUE}
        )
        assert roles[0].assigned_by == "system_init"
        mock_db.userrole.find_many.assert_called_once_with(
            where={"userId": "user_1"},
            include={"role": True},
        )

    @pytest.mark.asyncio
    async def test_user_without_roles(self, mock_db: Mock):
        mock_db.userrole.find_many.return_value = []
        store = PrismaRoleStore(mock_db)

        assert await store.list_roles_for_user("user_1") == []

    @pytest.mark.asyncio
    async def test_database_error_becomes_lookup_error(self, mock_db: Mock):
        mock_db.userrole.find_many.side_effect = ConnectionError("connection refused")
        store = PrismaRoleStore(mock_db)

        with pytest.raises(RoleLookupError) as exc_info:
            await store.list_roles_for_user("user_1")

        assert exc_info.value.user_id == "user_1"
        assert "connection refused" in exc_info.value.reason
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    @pytest.mark.asyncio
    async def test_timeout_becomes_lookup_error(self, mock_db: Mock):
        async def slow_query(**kwargs):
            await asyncio.sleep(1)
            return []

        mock_db.userrole.find_many = slow_query
        store = PrismaRoleStore(mock_db, timeout=0.01)

        with pytest.raises(RoleLookupError) as exc_info:
            await store.list_roles_for_user("user_1")

        assert "timed out" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_unknown_role_name_is_malformed(self, mock_db: Mock):
        mock_db.userrole.find_many.return_value = [
            make_user_role("user_1", "SUPERUSER", [])
        ]
        store = PrismaRoleStore(mock_db)

        with pytest.raises(RoleLookupError) as exc_info:
            await store.list_roles_for_user("user_1")

        assert "malformed" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_assignment_without_role_is_malformed(self, mock_db: Mock):
        record = make_user_role("user_1", "USER", [])
        record.role = None
        mock_db.userrole.find_many.return_value = [record]
        store = PrismaRoleStore(mock_db)

        with pytest.raises(RoleLookupError):
            await store.list_roles_for_user("user_1")

    def test_timeout_defaults_to_settings(self, mock_db: Mock):
        from dialogue_api.core.settings import settings

        assert PrismaRoleStore(mock_db).timeout == settings.ROLE_LOOKUP_TIMEOUT
