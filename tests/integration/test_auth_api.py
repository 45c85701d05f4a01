"""Integration tests for authentication API endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.config import settings
from kakeibo.core.security import create_refresh_token
from kakeibo.models.user import User
from kakeibo.repositories.household import HouseholdRepository
from kakeibo.repositories.profile import ProfileRepository
from kakeibo.repositories.user import UserRepository


class TestSignup:
    @pytest.mark.asyncio
    async def test_signup_success(self, client: AsyncClient, db_session: AsyncSession):
        response = await client.post(
            "/api/v1/auth/signup",
            json={
                "email": "mama@example.com",
                "password": "SecurePass123!",
                "display_name": "Mama",
                "role": "mama",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "mama@example.com"
        assert data["is_active"] is True
        assert "password" not in data
        assert "password_hash" not in data

        user = await UserRepository(db_session).get_by_email("mama@example.com")
        profile = await ProfileRepository(db_session).get_by_user(user.id)
        assert profile.role == "mama"
        assert profile.default_tag == "mama"

        membership = await HouseholdRepository(db_session).get_membership(user.id)
        assert str(membership.household_id) == settings.shared_household_id

    @pytest.mark.asyncio
    async def test_signup_duplicate_email(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/signup",
            json={"email": test_user.email, "password": "AnotherPass123!"},
        )

        assert response.status_code == 409
        assert response.json()["error_code"] == "AUTH_003"

    @pytest.mark.asyncio
    async def test_signup_invalid_email(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/signup",
            json={"email": "not-an-email", "password": "SecurePass123!"},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_000"

    @pytest.mark.asyncio
    async def test_signup_short_password(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/signup",
            json={"email": "short@example.com", "password": "short"},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_signup_invalid_role(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/signup",
            json={"email": "kid@example.com", "password": "SecurePass123!", "role": "kid"},
        )

        assert response.status_code == 400


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_success(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": test_user.email, "password": "password123"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["access_token"]
        assert data["refresh_token"]
        assert data["token_type"] == "bearer"

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": test_user.email, "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_001"

    @pytest.mark.asyncio
    async def test_login_unknown_user(self, client: AsyncClient, db_session: AsyncSession):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": "password123"},
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_001"


class TestRefresh:
    @pytest.mark.asyncio
    async def test_refresh_success(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/refresh",
            json={"refresh_token": create_refresh_token(test_user.id)},
        )

        assert response.status_code == 200
        assert response.json()["access_token"]

    @pytest.mark.asyncio
    async def test_refresh_with_access_token_rejected(
        self, client: AsyncClient, auth_headers: dict
    ):
        access_token = auth_headers["Authorization"].split(" ", 1)[1]

        response = await client.post(
            "/api/v1/auth/refresh", json={"refresh_token": access_token}
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_002"


class TestMe:
    @pytest.mark.asyncio
    async def test_me(self, client: AsyncClient, test_user: User, auth_headers: dict):
        response = await client.get("/api/v1/auth/me", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == test_user.email
        assert data["profile"]["role"] == "papa"
        assert data["profile"]["display_name"] == "Papa"
        assert data["household_id"] == settings.shared_household_id

    @pytest.mark.asyncio
    async def test_me_without_token(self, client: AsyncClient, db_session: AsyncSession):
        response = await client.get("/api/v1/auth/me")

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_002"

    @pytest.mark.asyncio
    async def test_me_with_invalid_token(self, client: AsyncClient, db_session: AsyncSession):
        response = await client.get(
            "/api/v1/auth/me", headers={"Authorization": "Bearer not.a.token"}
        )

        assert response.status_code == 401
