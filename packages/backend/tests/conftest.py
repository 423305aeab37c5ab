"""Test fixtures — an isolated app per test, backed by tmp_path.

Learn: Settings is passed straight into create_app(), so each test
gets its own JSON stores and upload directory under pytest's tmp_path
and nothing leaks between tests. bcrypt runs at 4 rounds to keep
signup/login fast.
"""

import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from angletrack.config import Settings
from angletrack.main import create_app

TEST_JWT_SECRET = "test-secret-0123456789abcdef0123456789abcdef"


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        data_dir=tmp_path / "data",
        upload_dir=tmp_path / "uploads",
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=4,
    )


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def records(app):
    """The app's RecordService, for service-level assertions."""
    return app.state.records


@pytest_asyncio.fixture()
async def client(app):
    """HTTP client talking to the app in-process.

    Learn: No auth override here — every protected route runs the real
    gate, so tests sign up and log in like a real client would.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def signup_and_login(client, email=None, password="password_123", name="Test User"):
    """Register a user, log in, return (email, auth headers)."""
    email = email or f"user-{uuid.uuid4().hex[:8]}@example.com"
    r = await client.post(
        "/auth/signup",
        json={"name": name, "email": email, "password": password},
    )
    assert r.status_code == 201, r.text
    r = await client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return email, {"Authorization": f"Bearer {r.json()['token']}"}


@pytest_asyncio.fixture()
async def auth_headers(client):
    _, headers = await signup_and_login(client)
    return headers
