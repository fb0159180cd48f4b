"""
Pytest configuration and fixtures for Supabridge tests.
"""

import os

import pytest

# Keep a developer's environment from leaking into tests
for _var in ("SUPABASE_URL", "SUPABASE_KEY", "SUPABRIDGE_TABLES", "SUPABRIDGE_FAIL_FAST"):
    os.environ.pop(_var, None)

from supabridge.config import BridgeSettings, get_settings
from supabridge.gateway import QueryGateway
from tests.fakes import FakeSupabase


@pytest.fixture
def sample_tables():
    """Sample rows for testing."""
    return {
        "users": [
            {"id": 1, "name": "alice", "email": "alice@test.local", "age": 34},
            {"id": 2, "name": "bob", "email": "bob@test.local", "age": 17},
            {"id": 3, "name": "carol", "email": "carol@example.com", "age": 18},
            {"id": 4, "name": "Dave Foo", "email": "dave@test.local", "age": 52},
        ],
        "products": [
            {"id": 10, "title": "xfooy widget", "price": 9.5},
            {"id": 11, "title": "FOO gadget", "price": 25.0},
            {"id": 12, "title": "plain thing", "price": 3.0},
        ],
        "orders": [],
    }


@pytest.fixture
def fake_supabase(sample_tables):
    return FakeSupabase(sample_tables)


@pytest.fixture
def bridge_settings():
    """Settings isolated from the environment and .env."""
    return BridgeSettings(_env_file=None)


@pytest.fixture
def gateway(fake_supabase, bridge_settings):
    async def provider():
        return fake_supabase

    return QueryGateway(client_provider=provider, settings=bridge_settings)


@pytest.fixture
def api_client(gateway):
    """TestClient with the gateway bound to the fake store."""
    from fastapi.testclient import TestClient

    from supabridge.web.app import app, get_gateway

    app.dependency_overrides[get_gateway] = lambda: gateway
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
