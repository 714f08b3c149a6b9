"""
Global pytest configuration and fixtures for the Dialogue API test suite.
"""

import os
from datetime import datetime
from types import SimpleNamespace
from typing import Any, Dict, Generator

# Set test environment variables before settings are loaded
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only-32-chars"

import jwt
import pytest
from fastapi.testclient import TestClient

from dialogue_api.main import app
from dialogue_api.shared.permissions import (
    AccessGate,
    PermissionResolver,
    RoleLookupError,
)
from dialogue_api.shared.permissions.dependencies import get_role_store
from tests.utils.role_store import FakeRoleStore


@pytest.fixture
def test_jwt_secret() -> str:
    """JWT secret for generating test tokens."""
    return "test-secret-key-for-testing-only-32-chars"


@pytest.fixture
def test_user_id() -> str:
    """Standard test user ID (Clerk style)."""
    return "user_test123"


@pytest.fixture
def other_user_id() -> str:
    return "user_other456"


@pytest.fixture
def valid_jwt_payload(test_user_id: str) -> Dict[str, Any]:
    """Valid JWT payload for testing."""
    return {
        "sub": test_user_id,
        "iss": "https://clerk.test",
        "sid": "sess_123",
    }


@pytest.fixture
def valid_jwt_token(test_jwt_secret: str, valid_jwt_payload: Dict[str, Any]) -> str:
    """Generate a valid JWT token for testing."""
    return jwt.encode(valid_jwt_payload, test_jwt_secret, algorithm="HS256")


@pytest.fixture
def auth_headers(valid_jwt_token: str) -> Dict[str, str]:
    """Generate authentication headers with valid JWT token."""
    return {"Authorization": f"Bearer {valid_jwt_token}"}


@pytest.fixture
def make_auth_headers(test_jwt_secret: str):
    """Build authentication headers for an arbitrary user id."""

    def _make(user_id: str) -> Dict[str, str]:
        token = jwt.encode({"sub": user_id}, test_jwt_secret, algorithm="HS256")
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def role_store() -> FakeRoleStore:
    return FakeRoleStore()


@pytest.fixture
def failing_role_store() -> FakeRoleStore:
    return FakeRoleStore(error=RoleLookupError("any", "connection refused"))


@pytest.fixture
def resolver(role_store: FakeRoleStore) -> PermissionResolver:
    return PermissionResolver(role_store)


@pytest.fixture
def gate(resolver: PermissionResolver) -> AccessGate:
    return AccessGate(resolver)


@pytest.fixture
def client(role_store: FakeRoleStore) -> Generator[TestClient, None, None]:
    """
    FastAPI test client wired to the in-memory role store.

    Not used as a context manager, so the lifespan (database connect)
    never runs.
    """
    app.dependency_overrides[get_role_store] = lambda: role_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_dialogue(test_user_id: str) -> SimpleNamespace:
    """Dialogue row as returned by Prisma."""
    return SimpleNamespace(
        id="dlg-123",
        userId=test_user_id,
        title="Test Dialogue",
        description="A test dialogue for development",
        genre="OTHER",
        hashtags=["test", "development"],
        isPublished=False,
        publishedAt=None,
        plays=5,
        lastPlayedAt=datetime(2024, 1, 15, 10, 0, 0),
        createdAt=datetime(2024, 1, 15, 9, 0, 0),
        updatedAt=datetime(2024, 1, 15, 9, 0, 0),
    )
