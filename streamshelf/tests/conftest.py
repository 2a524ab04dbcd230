# streamshelf/tests/conftest.py
import os

# Settings() requires a secret; set one before anything reads the environment
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from httpx import ASGITransport, AsyncClient

from streamshelf.core.settings import Settings
from streamshelf.main import create_app
from streamshelf.store import JsonFileStore


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "db"


@pytest.fixture
def settings(data_dir):
    # low bcrypt cost keeps the suite fast; production default is 10
    return Settings(JWT_SECRET="test-secret", DATA_DIR=str(data_dir), BCRYPT_ROUNDS=4)


@pytest.fixture
def store(data_dir):
    return JsonFileStore(data_dir)


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def signup(client):
    """Register + login; returns {"id", "token", "headers"}."""

    async def _signup(name: str = "Ana", email: str = "a@x.com", password: str = "pw123456") -> dict:
        r = await client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
        assert r.status_code == 201, r.text
        user_id = r.json()["id"]
        r = await client.post("/api/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        token = r.json()["token"]
        return {"id": user_id, "token": token, "headers": {"Authorization": f"Bearer {token}"}}

    return _signup


@pytest.fixture
async def auth(signup):
    return await signup()


@pytest.fixture
def make_item(client, auth):
    async def _make(title: str = "Interstellar", type: str = "movie", **extra) -> dict:
        r = await client.post("/api/catalog", json={"title": title, "type": type, **extra}, headers=auth["headers"])
        assert r.status_code == 201, r.text
        return r.json()

    return _make
