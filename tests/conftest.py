import os

os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("JWT_REFRESH_SECRET_KEY", "test-refresh-secret")

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app.database.conn import mongo_client
from main import app


@pytest.fixture
def db():
    """Fresh in-memory database wired into the connection singleton."""
    database = AsyncMongoMockClient(tz_aware=True)["mock_api_service_test"]
    mongo_client.bind(database)
    yield database
    mongo_client.bind(None)


@pytest.fixture
def client(db):
    # no context manager: the lifespan would try to reach a real server
    return TestClient(app)


def register(client, email="owner@example.com", password="secret123", name="Owner"):
    """Register a user and return bearer headers; cookies are dropped so each user is explicit."""
    resp = client.post("/api/auth/register", json={"email": email, "password": password, "name": name})
    assert resp.status_code == 201, resp.text
    client.cookies.clear()
    return {"Authorization": f"Bearer {resp.json()['token']['access_token']}"}


@pytest.fixture
def owner(client):
    return register(client)


@pytest.fixture
def project(client, owner):
    resp = client.post("/api/projects", json={"name": "Demo", "description": "demo project"}, headers=owner)
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.fixture
def todos(client, owner, project):
    """A ``todos`` resource with a required title and an optional done flag."""
    pid = project["_id"]
    client.post(f"/api/projects/{pid}/resources", json={"name": "todos"}, headers=owner)
    client.post(
        f"/api/projects/{pid}/resources/todos/fields",
        json={"name": "title", "type": "string", "required": True},
        headers=owner,
    )
    resp = client.post(
        f"/api/projects/{pid}/resources/todos/fields",
        json={"name": "done", "type": "boolean", "required": False},
        headers=owner,
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.fixture
def api(project):
    """Headers and base path for the public data API of ``project``."""
    return {"headers": {"x-api-key": project["api_key"]}, "base": f"/api/{project['_id']}"}
