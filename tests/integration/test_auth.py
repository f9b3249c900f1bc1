"""Signup, login and profile endpoints."""

import pytest

from tests.conftest import TEST_PASSWORD
from thinkscope.middleware.security import limiter


SIGNUP = {"name": "Linus", "email": "Linus@Example.com", "password": "hunter22"}


class TestSignup:
    @pytest.mark.asyncio
    async def test_signup_returns_token_and_user(self, client) -> None:
        response = await client.post("/api/auth/signup", json=SIGNUP)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["token"]
        assert data["tokenType"] == "bearer"
        assert data["user"]["name"] == "Linus"
        assert data["user"]["email"] == "linus@example.com"
        assert "password" not in data["user"]
        assert "passwordHash" not in data["user"]

        me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
        assert me.status_code == 200
        assert me.json()["data"]["id"] == data["user"]["id"]

    @pytest.mark.asyncio
    async def test_duplicate_email_is_conflict(self, client) -> None:
        await client.post("/api/auth/signup", json=SIGNUP)
        response = await client.post("/api/auth/signup", json={**SIGNUP, "email": "linus@example.com"})

        assert response.status_code == 409
        assert response.json() == {"success": False, "message": "User already exists", "error": "CONFLICT"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("payload", "field"),
        [
            ({**SIGNUP, "email": "not-an-email"}, "email"),
            ({**SIGNUP, "password": "123"}, "password"),
            ({"email": "a@example.com", "password": "hunter22"}, "name"),
        ],
    )
    async def test_invalid_signup_names_the_field(self, client, payload, field) -> None:
        response = await client.post("/api/auth/signup", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "INVALID_INPUT"
        assert body["message"].startswith(f"Invalid value for '{field}'")


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_with_valid_credentials(self, client, user) -> None:
        response = await client.post("/api/auth/login", json={"email": "ADA@example.com", "password": TEST_PASSWORD})

        assert response.status_code == 200
        assert response.json()["data"]["user"]["id"] == str(user.id)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "credentials",
        [
            {"email": "ada@example.com", "password": "wrong-password"},
            {"email": "nobody@example.com", "password": TEST_PASSWORD},
        ],
    )
    async def test_bad_credentials_are_401(self, client, user, credentials) -> None:
        response = await client.post("/api/auth/login", json=credentials)

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "message": "Invalid email or password",
            "error": "AUTH_REQUIRED",
        }


class TestProfile:
    @pytest.mark.asyncio
    async def test_update_name(self, client, auth_headers) -> None:
        response = await client.patch("/api/users/me", json={"name": "Ada Lovelace"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Ada Lovelace"
        assert response.json()["data"]["email"] == "ada@example.com"

    @pytest.mark.asyncio
    async def test_email_taken_by_someone_else(self, client, auth_headers, make_user) -> None:
        await make_user(email="grace@example.com", name="Grace")

        response = await client.patch("/api/users/me", json={"email": "grace@example.com"}, headers=auth_headers)

        assert response.status_code == 409
        assert response.json()["message"] == "Email is already in use"


class TestRateLimit:
    @pytest.mark.asyncio
    async def test_login_attempts_are_limited(self, client, monkeypatch) -> None:
        monkeypatch.setattr(limiter, "enabled", True)
        limiter.reset()
        credentials = {"email": "ada@example.com", "password": "wrong-password"}

        try:
            statuses = [(await client.post("/api/auth/login", json=credentials)).status_code for _ in range(5)]
            response = await client.post("/api/auth/login", json=credentials)
        finally:
            limiter.reset()

        assert statuses == [401] * 5
        assert response.status_code == 429
        assert response.json()["success"] is False
        assert response.json()["error"] == "RATE_LIMIT_EXCEEDED"
