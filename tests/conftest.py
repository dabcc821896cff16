"""Shared fixtures for the storefront tests."""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from storefront.core.config import settings
from storefront.core.security import get_password_hash
from storefront.main import create_app
from storefront.services.business import RESTAURANT_TZ
from storefront.services.settings import ConfigurationStore, MemoryBackend, default_rules

ADMIN_EMAIL = "owner@restaurant.test"
ADMIN_PASSWORD = "s3cret-pass"


def paris(year, month, day, hour=0, minute=0, second=0) -> datetime:
    """aware datetime in the restaurant timezone."""
    return datetime(year, month, day, hour, minute, second, tzinfo=RESTAURANT_TZ)


class FakeClock:
    """monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def rules():
    return default_rules()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend, clock):
    s = ConfigurationStore(backend, ttl_seconds=60, timeout_seconds=1, clock=clock)
    yield s
    s.close()


@pytest.fixture(scope="session")
def admin_password_hash():
    return get_password_hash(ADMIN_PASSWORD)


@pytest.fixture
def admin_settings(monkeypatch, admin_password_hash):
    monkeypatch.setattr(settings, "ADMIN_EMAIL", ADMIN_EMAIL)
    monkeypatch.setattr(settings, "ADMIN_PASSWORD_HASH", admin_password_hash)
    return settings


@pytest.fixture
def client(store, admin_settings):
    app = create_app(store=store)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_headers(client):
    r = client.post("/api/v1/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['access_token']}"}
