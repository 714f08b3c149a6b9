"""
Tests for shared permissions dependencies (require_policy,
require_permissions and enforce_policy).
"""

from typing import Dict

import pytest
from fastapi import Depends, FastAPI, HTTPException
from fastapi.testclient import TestClient

from dialogue_api.shared.permissions.dependencies import (
    enforce_policy,
    get_role_store,
    require_permissions,
    require_policy,
)
from dialogue_api.shared.permissions.exceptions import RoleLookupError
from dialogue_api.shared.permissions.gate import AccessGate
from dialogue_api.shared.permissions.models import Permission, RoleName
from dialogue_api.shared.permissions.policies import Action, Resource
from dialogue_api.shared.permissions.services import PermissionResolver
from tests.utils.role_store import FakeRoleStore


def build_app(store: FakeRoleStore) -> FastAPI:
    app = FastAPI()

    @app.post("/dialogues/{dialogue_id}/publish")
    async def publish(
        dialogue_id: str,
        user_id: str = Depends(require_policy(Resource.DIALOGUE, Action.PUBLISH)),
    ) -> Dict[str, str]:
        return {"user_id": user_id}

    @app.get("/users/{userId}/profile")
    async def profile(
        userId: str,
        user_id: str = Depends(require_policy(Resource.USER, Action.VIEW)),
    ) -> Dict[str, str]:
        return {"user_id": user_id}

    @app.get("/moderation")
    async def moderation(
        user_id: str = Depends(
            require_permissions(
                Permission.MANAGE_USERS, Permission.MANAGE_ROLES, require_all=False
            )
        ),
    ) -> Dict[str, str]:
        return {"user_id": user_id}

    @app.get("/admin")
    async def admin(
        user_id: str = Depends(
            require_permissions(Permission.MANAGE_USERS, Permission.MANAGE_ROLES)
        ),
    ) -> Dict[str, str]:
        return {"user_id": user_id}

    app.dependency_overrides[get_role_store] = lambda: store
    return app


@pytest.fixture
def store() -> FakeRoleStore:
    return FakeRoleStore(
        {
            "admin_1": [RoleName.ADMIN],
            "mod_1": [RoleName.MODERATOR],
            "user_1": [RoleName.USER],
        }
    )


@pytest.fixture
def app_client(store: FakeRoleStore) -> TestClient:
    return TestClient(build_app(store))


class TestRequirePolicy:
    def test_missing_token_is_401(self, app_client: TestClient):
        response = app_client.post("/dialogues/dlg-1/publish")

        assert response.status_code == 401

    def test_malformed_header_is_401(self, app_client: TestClient):
        response = app_client.post(
            "/dialogues/dlg-1/publish", headers={"Authorization": "Token abc"}
        )

        assert response.status_code == 401

    def test_insufficient_permissions_is_403(
        self, app_client: TestClient, make_auth_headers
    ):
        response = app_client.post(
            "/dialogues/dlg-1/publish", headers=make_auth_headers("user_1")
        )

        assert response.status_code == 403
        assert "publish dialogue" in response.json()["detail"]

    def test_permitted_user_passes(self, app_client: TestClient, make_auth_headers):
        response = app_client.post(
            "/dialogues/dlg-1/publish", headers=make_auth_headers("mod_1")
        )

        assert response.status_code == 200
        assert response.json() == {"user_id": "mod_1"}

    def test_self_override_reads_path_parameter(
        self, app_client: TestClient, make_auth_headers
    ):
        own = app_client.get("/users/user_1/profile", headers=make_auth_headers("user_1"))
        other = app_client.get(
            "/users/user_1/profile", headers=make_auth_headers("admin_1")
        )

        assert own.status_code == 200
        assert other.status_code == 403

    def test_lookup_failure_is_503(self, make_auth_headers):
        failing = FakeRoleStore(error=RoleLookupError("mod_1"))
        client = TestClient(build_app(failing))

        response = client.post(
            "/dialogues/dlg-1/publish", headers=make_auth_headers("mod_1")
        )

        assert response.status_code == 503

    def test_unknown_policy_fails_at_definition(self):
        with pytest.raises(KeyError):
            require_policy(Resource.ROLE, Action.PUBLISH)


class TestRequirePermissions:
    def test_any_mode(self, app_client: TestClient, make_auth_headers):
        assert (
            app_client.get("/moderation", headers=make_auth_headers("mod_1")).status_code
            == 200
        )
        assert (
            app_client.get("/moderation", headers=make_auth_headers("user_1")).status_code
            == 403
        )

    def test_all_mode(self, app_client: TestClient, make_auth_headers):
        assert (
            app_client.get("/admin", headers=make_auth_headers("admin_1")).status_code
            == 200
        )
        response = app_client.get("/admin", headers=make_auth_headers("mod_1"))

        assert response.status_code == 403
        assert "MANAGE_USERS, MANAGE_ROLES" in response.json()["detail"]

    def test_missing_token_is_401(self, app_client: TestClient):
        assert app_client.get("/admin").status_code == 401

    def test_lookup_failure_is_503(self, make_auth_headers):
        client = TestClient(build_app(FakeRoleStore(error=RoleLookupError("x"))))

        assert client.get("/admin", headers=make_auth_headers("admin_1")).status_code == 503


class TestEnforcePolicy:
    @pytest.mark.asyncio
    async def test_grants(self, store: FakeRoleStore):
        gate = AccessGate(PermissionResolver(store))

        result = await enforce_policy(gate, "admin_1", Resource.ROLE, Action.MANAGE)

        assert result == "admin_1"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "user_id, expected_status",
        [(None, 401), ("user_1", 403)],
    )
    async def test_maps_denials(self, store: FakeRoleStore, user_id, expected_status):
        gate = AccessGate(PermissionResolver(store))

        with pytest.raises(HTTPException) as exc_info:
            await enforce_policy(gate, user_id, Resource.ROLE, Action.MANAGE)

        assert exc_info.value.status_code == expected_status

    @pytest.mark.asyncio
    async def test_maps_lookup_failure(self):
        gate = AccessGate(PermissionResolver(FakeRoleStore(error=RoleLookupError("x"))))

        with pytest.raises(HTTPException) as exc_info:
            await enforce_policy(gate, "user_1", Resource.ROLE, Action.MANAGE)

        assert exc_info.value.status_code == 503
        assert isinstance(exc_info.value.__cause__, RoleLookupError)
