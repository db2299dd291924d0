# tests/test_auth.py
"""
Authentication and authorization tests
Tests: Signup, login, JWT refresh, role gates
"""

import pytest
from fastapi import status

from conftest import TEST_PASSWORD
from app.core.security import create_refresh_token


class TestAuthentication:
    """Test authentication flows"""

    @pytest.mark.asyncio
    async def test_user_signup(self, client):
        """Signup returns tokens and the user lands on company setup"""

        response = await client.post("/api/v1/auth/signup", json={
            "email": "NewUser@example.com",
            "password": "SecurePassword123!",
            "full_name": "New User",
        })

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert "access_token" in data
        assert "refresh_token" in data

        me = await client.get(
            "/api/v1/users/me",
            headers={"Authorization": f"Bearer {data['access_token']}"},
        )
        assert me.json()["email"] == "newuser@example.com"
        assert me.json()["system_role"] == "user"

    @pytest.mark.asyncio
    async def test_duplicate_email_signup(self, client, test_user):
        response = await client.post("/api/v1/auth/signup", json={
            "email": test_user.email,
            "password": "SecurePassword123!",
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "already registered" in response.json()["detail"].lower()

    @pytest.mark.asyncio
    async def test_short_password_rejected(self, client):
        response = await client.post("/api/v1/auth/signup", json={
            "email": "user@example.com",
            "password": "weak",
        })

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_login_success(self, client, test_user):
        response = await client.post("/api/v1/auth/login", json={
            "email": test_user.email,
            "password": TEST_PASSWORD,
        })

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["token_type"] == "bearer"

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client, test_user):
        response = await client.post("/api/v1/auth/login", json={
            "email": test_user.email,
            "password": "WrongPassword123!",
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_login_inactive_user(self, client, db_session, test_user):
        test_user.is_active = False
        await db_session.commit()

        response = await client.post("/api/v1/auth/login", json={
            "email": test_user.email,
            "password": TEST_PASSWORD,
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN

    @pytest.mark.asyncio
    async def test_token_refresh(self, client, test_user):
        login_response = await client.post("/api/v1/auth/login", json={
            "email": test_user.email,
            "password": TEST_PASSWORD,
        })

        response = await client.post("/api/v1/auth/refresh", json={
            "refresh_token": login_response.json()["refresh_token"],
        })

        assert response.status_code == status.HTTP_200_OK
        assert "access_token" in response.json()

    @pytest.mark.asyncio
    async def test_access_token_cannot_refresh(self, client, test_user):
        login_response = await client.post("/api/v1/auth/login", json={
            "email": test_user.email,
            "password": TEST_PASSWORD,
        })

        response = await client.post("/api/v1/auth/refresh", json={
            "refresh_token": login_response.json()["access_token"],
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_refresh_token_is_not_a_bearer_token(self, client, test_user):
        token = create_refresh_token({"sub": str(test_user.id)})

        response = await client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_logout(self, client):
        response = await client.post("/api/v1/auth/logout")
        assert response.status_code == status.HTTP_200_OK


class TestAuthorization:
    """Role gates"""

    @pytest.mark.asyncio
    async def test_tenant_routes_require_auth(self, client):
        response = await client.get("/api/v1/rooms")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_user_without_company_cannot_use_tenant_routes(self, client, test_user):
        from conftest import make_auth_headers

        response = await client.get("/api/v1/rooms", headers=make_auth_headers(test_user))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    @pytest.mark.asyncio
    async def test_superadmin_cannot_use_tenant_routes(self, client, superadmin_headers):
        response = await client.get("/api/v1/bookings", headers=superadmin_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    @pytest.mark.asyncio
    async def test_tenant_user_cannot_use_admin_routes(self, client, auth_headers):
        response = await client.get("/api/v1/admin/stats", headers=auth_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN
