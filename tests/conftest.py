"""Shared fixtures: a throwaway SQLite database and an in-process HTTP client."""

import os
import tempfile

_db_dir = tempfile.mkdtemp(prefix="giftreservoir-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_db_dir}/test.db"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import httpx
import pytest

from giftreservoir.core.database import init_db, drop_db, get_db_context
from giftreservoir.core.security import SecurityUtils
from giftreservoir.main import app


def auth_headers(user_id: str, **claims) -> dict:
    token = SecurityUtils.create_access_token({"sub": user_id, **claims})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(autouse=True)
async def database():
    await init_db()
    yield
    await drop_db()


@pytest.fixture
async def db():
    async with get_db_context() as session:
        yield session


@pytest.fixture
async def client():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def owner():
    return auth_headers("owner-1", email="owner@example.com", first_name="Olive", last_name="Owner")


@pytest.fixture
def guest():
    return auth_headers("guest-1", email="guest@example.com", first_name="Gus")


@pytest.fixture
def other_guest():
    return auth_headers("guest-2", email="other@example.com", first_name="Greta")


@pytest.fixture
async def wishlist(client, owner):
    response = await client.post("/api/v1/wishlists", json={"name": "Birthday"}, headers=owner)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
async def item(client, owner, wishlist):
    response = await client.post(
        f"/api/v1/wishlists/{wishlist['id']}/items",
        json={"name": "Headphones", "price": "$99.99"},
        headers=owner,
    )
    assert response.status_code == 201
    return response.json()
