# =============================================================================
# DOG ADOPTION PLATFORM API - AUTH API TESTS
# =============================================================================
# File: tests/test_auth_api.py
# Description: Integration tests for authentication API endpoints
# =============================================================================

import pytest
from fastapi.testclient import TestClient

from conftest import auth_headers, register_user


class TestRegisterEndpoint:
    """Test suite for POST /api/auth/register."""

    def test_register_success(self, test_client: TestClient):
        # Arrange
        payload = {"username": "alice", "password": "secret123"}

        # Act
        response = test_client.post("/api/auth/register", json=payload)

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User registered successfully"
        assert body["data"]["token"]
        assert body["data"]["user"]["username"] == "alice"
        assert set(body["data"]["user"]) == {"id", "username"}

    def test_register_trims_username(self, test_client: TestClient):
        response = test_client.post(
            "/api/auth/register",
            json={"username": "  alice  ", "password": "secret123"},
        )

        assert response.status_code == 201
        assert response.json()["data"]["user"]["username"] == "alice"

    def test_register_duplicate_username(self, test_client: TestClient):
        # Arrange
        register_user(test_client, "alice")

        # Act
        response = test_client.post(
            "/api/auth/register",
            json={"username": "alice", "password": "other-pass"},
        )

        # Assert
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Username already exists",
        }

    @pytest.mark.parametrize(
        "payload,field",
        [
            ({"username": "ab", "password": "secret123"}, "username"),
            ({"username": "a" * 31, "password": "secret123"}, "username"),
            ({"username": "bad-name!", "password": "secret123"}, "username"),
            ({"username": "alice", "password": "12345"}, "password"),
            ({"password": "secret123"}, "username"),
            ({"username": "alice"}, "password"),
        ],
    )
    def test_register_validation(self, test_client: TestClient, payload: dict, field: str):
        response = test_client.post("/api/auth/register", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert field in [error["field"] for error in body["errors"]]

    def test_register_validation_message(self, test_client: TestClient):
        response = test_client.post(
            "/api/auth/register",
            json={"username": "alice", "password": "123"},
        )

        errors = response.json()["errors"]
        assert errors == [{
            "field": "password",
            "message": "Password must be at least 6 characters long",
            "location": "body",
        }]

    def test_register_malformed_json(self, test_client: TestClient):
        response = test_client.post(
            "/api/auth/register",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"


class TestLoginEndpoint:
    """Test suite for POST /api/auth/login."""

    def test_login_success(self, test_client: TestClient):
        _, user_id = register_user(test_client, "alice")

        response = test_client.post(
            "/api/auth/login",
            json={"username": "alice", "password": "secret123"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["data"]["user"] == {"id": user_id, "username": "alice"}
        assert body["data"]["token"]

    def test_wrong_password_and_unknown_user_identical(self, test_client: TestClient):
        """Both failures return the same status and body."""
        register_user(test_client, "alice")

        wrong_password = test_client.post(
            "/api/auth/login",
            json={"username": "alice", "password": "not-the-password"},
        )
        unknown_user = test_client.post(
            "/api/auth/login",
            json={"username": "nobody", "password": "secret123"},
        )

        assert wrong_password.status_code == unknown_user.status_code == 401
        assert wrong_password.json() == unknown_user.json() == {
            "success": False,
            "message": "Invalid credentials",
        }

    def test_login_missing_fields(self, test_client: TestClient):
        response = test_client.post("/api/auth/login", json={})

        assert response.status_code == 400
        fields = {error["field"] for error in response.json()["errors"]}
        assert fields == {"username", "password"}

    def test_login_blank_username(self, test_client: TestClient):
        response = test_client.post(
            "/api/auth/login",
            json={"username": "   ", "password": "secret123"},
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["message"] == "Username is required"


class TestProfileEndpoint:
    """Test suite for GET /api/auth/profile."""

    def test_profile(self, test_client: TestClient):
        token, user_id = register_user(test_client, "alice")

        response = test_client.get("/api/auth/profile", headers=auth_headers(token))

        assert response.status_code == 200
        user = response.json()["data"]["user"]
        assert user["id"] == user_id
        assert user["username"] == "alice"
        assert "createdAt" in user
        assert "passwordHash" not in user

    def test_profile_without_token(self, test_client: TestClient):
        response = test_client.get("/api/auth/profile")

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "message": "Access token required",
        }

    def test_profile_with_non_bearer_scheme(self, test_client: TestClient):
        token, _ = register_user(test_client, "alice")

        response = test_client.get(
            "/api/auth/profile",
            headers={"Authorization": f"Token {token}"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Access token required"

    def test_profile_with_invalid_token(self, test_client: TestClient):
        response = test_client.get(
            "/api/auth/profile",
            headers=auth_headers("invalid.token.value"),
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_token_from_other_deployment_rejected(self, test_client: TestClient, make_client):
        other = make_client(jwt_secret_key="a-completely-different-secret-for-other-app")
        token, _ = register_user(other, "mallory")

        response = test_client.get("/api/auth/profile", headers=auth_headers(token))

        assert response.status_code == 401
