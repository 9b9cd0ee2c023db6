from conftest import register


def test_register_returns_user_and_tokens(client):
    resp = client.post("/api/auth/register", json={"email": "a@example.com", "password": "secret123", "name": "A"})
    assert resp.status_code == 201
    body = resp.json()
    assert body["user"]["email"] == "a@example.com"
    assert "password" not in body["user"]
    assert body["token"]["token_type"] == "bearer"
    assert "access_token" in resp.cookies


def test_register_duplicate_email(client):
    register(client, "a@example.com")
    resp = client.post("/api/auth/register", json={"email": "a@example.com", "password": "secret123"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "User already exists"}


def test_register_rejects_bad_payload(client):
    resp = client.post("/api/auth/register", json={"email": "not-an-email", "password": "secret123"})
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_login(client):
    register(client, "a@example.com", "secret123")
    resp = client.post("/api/auth/login", json={"email": "a@example.com", "password": "secret123"})
    assert resp.status_code == 200
    assert resp.json()["user"]["email"] == "a@example.com"


def test_login_wrong_password(client):
    register(client, "a@example.com", "secret123")
    resp = client.post("/api/auth/login", json={"email": "a@example.com", "password": "nope-nope"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid credentials"}


def test_session_cookie_authenticates(client):
    client.post("/api/auth/register", json={"email": "a@example.com", "password": "secret123"})
    resp = client.get("/api/auth/me")
    assert resp.status_code == 200
    assert resp.json()["email"] == "a@example.com"


def test_logout_clears_session(client):
    client.post("/api/auth/register", json={"email": "a@example.com", "password": "secret123"})
    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401


def test_refresh_issues_new_pair(client):
    resp = client.post("/api/auth/register", json={"email": "a@example.com", "password": "secret123"})
    refresh_token = resp.json()["token"]["refresh_token"]
    client.cookies.clear()
    resp = client.post("/api/auth/refresh", json={"refresh_token": refresh_token})
    assert resp.status_code == 200
    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {resp.json()['access_token']}"})
    assert me.status_code == 200


def test_refresh_rejects_access_token(client):
    headers = register(client)
    access = headers["Authorization"].split()[1]
    resp = client.post("/api/auth/refresh", json={"refresh_token": access})
    assert resp.status_code == 401


def test_management_requires_session(client):
    resp = client.get("/api/projects")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized"}


def test_garbage_token_rejected(client):
    resp = client.get("/api/projects", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
