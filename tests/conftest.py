"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
import jwt  # PyJWT
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_client_factory, get_identity_provider
from shared.models import Principal

from tests.fakes import FakeClientFactory, FakeIdentityProvider, FakeStore


# Test JWT secret (only for testing; signatures are never verified locally)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

ADMIN_ID = "admin-1"
ALICE_ID = "alice"
BOB_ID = "bob"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


def bearer(token: str) -> dict[str, str]:
    """Authorization header for a token."""
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def store() -> FakeStore:
    """A store with one admin, two users, a category and a published post."""
    store = FakeStore()
    store.add_user(ADMIN_ID, role="admin", name="Admin")
    store.add_user(ALICE_ID, name="Alice")
    store.add_user(BOB_ID, name="Bob")
    store.seed("categories", {"id": 1, "name": "General", "slug": "general"})
    store.add_post(1, title="Hello world")
    return store


@pytest.fixture
def tokens() -> dict[str, str]:
    """One valid token per seeded user, keyed by user id."""
    return {
        user_id: create_test_token(user_id=user_id, email=f"{user_id}@example.com")
        for user_id in (ADMIN_ID, ALICE_ID, BOB_ID)
    }


@pytest.fixture
def identity(tokens: dict[str, str]) -> FakeIdentityProvider:
    return FakeIdentityProvider(
        {
            token: Principal(id=user_id, email=f"{user_id}@example.com")
            for user_id, token in tokens.items()
        }
    )


@pytest.fixture
def app(store: FakeStore, tokens: dict[str, str], identity: FakeIdentityProvider):
    """Create a fresh app wired to the in-memory store."""
    app = create_app()
    factory = FakeClientFactory(store, {token: user_id for user_id, token in tokens.items()})
    app.dependency_overrides[get_client_factory] = lambda: factory
    app.dependency_overrides[get_identity_provider] = lambda: identity
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
