import os

# Settings are read at import time; keep bcrypt cheap for the test run
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from main import app
from app.database import Store, get_store
from app.models.user import UserRole
from app.schemas.auth import Principal
from app.services.seed import seed_demo_data


class FakeClock:
    """Settable clock for token expiry tests."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def fake_clock():
    return FakeClock(datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def store():
    # Seeded exactly like a process start: tenants, users, one sample note per tenant
    store = Store()
    seed_demo_data(store, include_sample_notes=True)
    yield store
    store.dispose()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    def _login(email: str, password: str = "password") -> dict:
        resp = client.post("/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}
    return _login


def make_principal(
    user_id: str = "user_member_acme",
    tenant_slug: str = "acme",
    role: UserRole = UserRole.member,
) -> Principal:
    return Principal(
        user_id=user_id,
        email=f"{user_id}@example.test",
        role=role,
        tenant_slug=tenant_slug,
        issued_at=0,
        expires_at=2**31,
    )


@pytest.fixture
def acme_member():
    return make_principal("user_member_acme", "acme", UserRole.member)


@pytest.fixture
def acme_admin():
    return make_principal("user_admin_acme", "acme", UserRole.admin)


@pytest.fixture
def globex_member():
    return make_principal("user_member_globex", "globex", UserRole.member)


@pytest.fixture
def globex_admin():
    return make_principal("user_admin_globex", "globex", UserRole.admin)
