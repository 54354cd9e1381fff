"""
tests/conftest.py -- Shared test fixtures for Transbook tests.

This module provides:
  - hasher / tokens / store: fast unit-level collaborators
  - _patch_lifespan(): wires test components into app.state, bypassing real startup
  - api_client: TestClient over the real app with an isolated in-memory store
  - registered_user: a user created through the real /register route

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
for the API client because TestClient runs sync route handlers in a thread
pool. Plain :memory: DBs are per-connection and would present a blank schema
to each worker thread.

bcrypt rounds are dropped to the minimum (4) so the suite stays fast; the
cost factor does not change hashing or verification semantics.

The DEBUG env var must be set before any api/ import so get_settings()
auto-generates SECRET_KEY in dev mode rather than raising ValueError.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Generator
from contextlib import asynccontextmanager

# CRITICAL: Set DEBUG before any api/core import so get_settings() can
# auto-generate SECRET_KEY in dev mode instead of raising ValueError.
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from api.limiter import limiter
from api.main import app
from auth.passwords import PasswordHasher
from auth.store import UserStore
from auth.tokens import TokenService

TEST_SECRET = "test-secret-key-0123456789abcdef0123456789abcdef"


# ---------------------------------------------------------------------------
# Unit-level fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(TEST_SECRET, lifetime_seconds=3600)


@pytest.fixture
def store() -> Generator[UserStore, None, None]:
    s = UserStore("sqlite:///:memory:")
    yield s
    s.close()


# ---------------------------------------------------------------------------
# API fixtures
# ---------------------------------------------------------------------------


def _patch_lifespan(user_store: UserStore, hasher: PasswordHasher, tokens: TokenService):
    """Return an async context manager that replaces the real lifespan.

    Wires pre-created test components into app.state so TestClient routes
    see an isolated database and a known signing secret.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = user_store
        app.state.password_hasher = hasher
        app.state.token_service = tokens
        yield

    return test_lifespan


@pytest.fixture(scope="module")
def api_client(hasher: PasswordHasher) -> Generator[TestClient, None, None]:
    """Yield a TestClient over the real app with isolated components.

    The database name is unique per module so modules never share users.
    Rate limiting is switched off; individual tests re-enable it when they
    exercise it.
    """
    db_url = f"sqlite:///file:test_auth_{uuid.uuid4().hex}?mode=memory&cache=shared&uri=true"
    user_store = UserStore(db_url)
    tokens = TokenService(TEST_SECRET, lifetime_seconds=3600)

    app.router.lifespan_context = _patch_lifespan(user_store, hasher, tokens)
    limiter.enabled = False

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client

    limiter.enabled = True
    user_store.close()


@pytest.fixture
def registered_user(api_client: TestClient) -> dict:
    """Register a fresh user through the API; return the credentials and response body."""
    email = f"user-{uuid.uuid4().hex[:8]}@example.com"
    password = "correct horse battery staple"
    resp = api_client.post("/api/v1/auth/register", json={"email": email, "password": password})
    assert resp.status_code == 201, resp.text
    return {"email": email, "password": password, **resp.json()}
