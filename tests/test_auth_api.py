"""HTTP tests for /api/auth, token handling and the health check."""

from datetime import timedelta
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from taskboard.core.security import create_access_token, hash_password, verify_password, verify_token

USER_PAYLOAD = {"username": "alice", "email": "alice@taskboard.io", "password": "Secret123"}


def test_register_returns_token_and_profile(client: TestClient) -> None:
    response = client.post("/api/auth/register", json=USER_PAYLOAD)
    assert response.status_code == 201

    body = response.json()
    assert body["success"] is True
    assert body["message"] == "User registered successfully"
    assert body["data"]["tokenType"] == "bearer"
    user = body["data"]["user"]
    assert user["username"] == "alice"
    assert user["email"] == "alice@taskboard.io"
    assert "password" not in user
    assert "passwordHash" not in user


def test_register_duplicate_user(client: TestClient, auth_token: str) -> None:
    response = client.post("/api/auth/register", json=USER_PAYLOAD)
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "User already exists"
    assert {error["field"] for error in body["errors"]} == {"email", "username"}

    # Email uniqueness ignores case
    payload = dict(USER_PAYLOAD, username="alice2", email="ALICE@taskboard.io")
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 400
    assert [error["field"] for error in response.json()["errors"]] == ["email"]


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"password": "short1A"}, "password"),
        ({"password": "nodigitsHERE"}, "password"),
        ({"password": "alllower123"}, "password"),
        ({"username": "al"}, "username"),
        ({"username": "has space"}, "username"),
        ({"email": "not-an-email"}, "email"),
    ],
)
def test_register_validation(client: TestClient, overrides: dict, field: str) -> None:
    response = client.post("/api/auth/register", json=dict(USER_PAYLOAD, **overrides))
    assert response.status_code == 400
    assert [error["field"] for error in response.json()["errors"]] == [field]


def test_login(client: TestClient, auth_token: str) -> None:
    response = client.post(
        "/api/auth/login",
        json={"email": USER_PAYLOAD["email"], "password": USER_PAYLOAD["password"]},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["data"]["user"]["username"] == "alice"
    assert verify_token(body["data"]["token"]) is not None


@pytest.mark.parametrize(
    "email, password",
    [
        ("alice@taskboard.io", "WrongPass123"),
        ("nobody@taskboard.io", "Secret123"),
    ],
)
def test_login_rejects_bad_credentials(client: TestClient, auth_token: str, email: str, password: str) -> None:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Invalid email or password"}


def test_me_and_users(client: TestClient, auth_headers: dict) -> None:
    response = client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["user"]["email"] == "alice@taskboard.io"

    client.post(
        "/api/auth/register",
        json={"username": "bob", "email": "bob@taskboard.io", "password": "Secret123"},
    )
    response = client.get("/api/auth/users", headers=auth_headers)
    assert response.status_code == 200
    assert [user["username"] for user in response.json()["data"]["users"]] == ["alice", "bob"]

    assert client.get("/api/auth/users").status_code == 401


def test_expired_token_rejected(client: TestClient, auth_token: str) -> None:
    sub = verify_token(auth_token)["sub"]
    expired = create_access_token({"sub": sub}, expires_delta=timedelta(minutes=-5))
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired token"


def test_token_for_unknown_user_rejected(client: TestClient) -> None:
    for sub in (str(uuid4()), "not-a-uuid"):
        token = create_access_token({"sub": sub})
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["message"] == "User no longer exists"


def test_password_hashing() -> None:
    hashed = hash_password("Secret123")
    assert hashed != "Secret123"
    assert verify_password("Secret123", hashed)
    assert not verify_password("secret123", hashed)
    assert not verify_password("Secret123", "not-a-bcrypt-hash")


def test_health_check(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"


def test_unknown_route_uses_error_envelope(client: TestClient) -> None:
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Not Found"}
