"""Account and bearer-token endpoint tests."""

from datetime import timedelta

from fastapi.testclient import TestClient

from travelstory.core.config import Settings
from travelstory.core.security import create_access_token

from .helpers import register


class TestCreateAccount:
    def test_returns_token_and_user(self, client: TestClient) -> None:
        response = client.post(
            "/create-account",
            json={"fullName": "Ursula One", "email": "u1@example.com", "password": "pw-123456"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["error"] is False
        assert body["user"] == {"fullName": "Ursula One", "email": "u1@example.com"}
        assert body["accessToken"]
        assert body["message"] == "Registration successful"

    def test_duplicate_email_is_rejected(self, client: TestClient) -> None:
        register(client, "Ursula One", "u1@example.com")

        response = client.post(
            "/create-account",
            json={"fullName": "Impostor", "email": "U1@example.com", "password": "pw"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": True, "message": "User already exists"}

    def test_missing_fields(self, client: TestClient) -> None:
        response = client.post("/create-account", json={"email": "u1@example.com"})

        assert response.status_code == 400
        assert response.json()["error"] is True


class TestLogin:
    def test_login_with_valid_credentials(self, client: TestClient) -> None:
        register(client, "Ursula One", "u1@example.com", password="pw-123456")

        response = client.post("/login", json={"email": "u1@example.com", "password": "pw-123456"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["user"]["fullName"] == "Ursula One"

        profile = client.get(
            "/get-user", headers={"Authorization": f"Bearer {body['accessToken']}"}
        )
        assert profile.status_code == 200
        assert profile.json()["user"]["email"] == "u1@example.com"

    def test_wrong_password(self, client: TestClient) -> None:
        register(client, "Ursula One", "u1@example.com", password="pw-123456")

        response = client.post("/login", json={"email": "u1@example.com", "password": "nope"})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid Credentials"

    def test_unknown_user(self, client: TestClient) -> None:
        response = client.post("/login", json={"email": "ghost@example.com", "password": "pw"})

        assert response.status_code == 400
        assert response.json()["message"] == "User not found"


class TestBearerAuth:
    def test_missing_token_is_401(self, client: TestClient) -> None:
        response = client.get("/get-all-story")

        assert response.status_code == 401
        assert response.json()["error"] is True

    def test_garbage_token_is_403(self, client: TestClient) -> None:
        response = client.get("/get-all-story", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 403

    def test_expired_token_is_403(self, client: TestClient, settings: Settings) -> None:
        token = create_access_token(1, expires_delta=timedelta(minutes=-1), settings=settings)

        response = client.get("/get-all-story", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403
        assert response.json()["message"] == "Invalid or expired token."

    def test_token_for_deleted_user(self, client: TestClient, settings: Settings) -> None:
        token = create_access_token(999, settings=settings)

        response = client.get("/get-user", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_auth_checked_before_body(self, client: TestClient) -> None:
        response = client.post("/add-travel-story", json={})
        assert response.status_code == 401


def test_health(client: TestClient) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["database"] == "healthy"
