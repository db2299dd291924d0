# tests/test_companies.py
"""
Company setup, settings and team tests
"""

import pytest
from fastapi import status

from conftest import create_user, make_auth_headers


class TestCompanySetup:

    @pytest.mark.asyncio
    async def test_create_company_makes_caller_admin(self, client, test_user):
        headers = make_auth_headers(test_user)

        response = await client.post("/api/v1/companies", json={"name": "Hill Lodge", "currency": "bdt"}, headers=headers)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["currency"] == "BDT"
        assert data["plan_name"] == "Free"
        assert data["tax_enabled"] is False

        members = await client.get("/api/v1/companies/me/users", headers=headers)
        assert members.json()[0]["role"] == "admin"
        assert members.json()[0]["user_email"] == test_user.email

    @pytest.mark.asyncio
    async def test_second_company_rejected(self, client, auth_headers):
        response = await client.post("/api/v1/companies", json={"name": "Another"}, headers=auth_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio
    async def test_superadmin_cannot_create_company(self, client, superadmin_headers):
        response = await client.post("/api/v1/companies", json={"name": "Nope"}, headers=superadmin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio
    async def test_unsupported_currency_rejected(self, client, test_user):
        response = await client.post(
            "/api/v1/companies",
            json={"name": "X", "currency": "XYZ"},
            headers=make_auth_headers(test_user),
        )
        assert response.status_code == 422


class TestCompanySettings:

    @pytest.mark.asyncio
    async def test_update_tax_settings(self, client, auth_headers):
        response = await client.patch(
            "/api/v1/companies/me",
            json={"tax_enabled": True, "tax_rate": 7.5, "address": "1 Beach Rd"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["tax_enabled"] is True
        assert data["tax_rate"] == 7.5
        assert data["address"] == "1 Beach Rd"

    @pytest.mark.asyncio
    async def test_tax_rate_out_of_range(self, client, auth_headers):
        response = await client.patch("/api/v1/companies/me", json={"tax_rate": 150}, headers=auth_headers)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_null_for_required_setting_rejected(self, client, auth_headers, test_company):
        for field in ("tax_enabled", "currency", "name", "tax_rate"):
            response = await client.patch("/api/v1/companies/me", json={field: None}, headers=auth_headers)
            assert response.status_code == 422, field

        assert test_company.tax_enabled is False
        assert test_company.currency == "USD"

    @pytest.mark.asyncio
    async def test_null_clears_optional_setting(self, client, auth_headers):
        await client.patch("/api/v1/companies/me", json={"address": "1 Beach Rd"}, headers=auth_headers)

        response = await client.patch("/api/v1/companies/me", json={"address": None}, headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["address"] is None

    @pytest.mark.asyncio
    async def test_member_cannot_change_settings(self, client, member_headers):
        response = await client.patch("/api/v1/companies/me", json={"name": "Renamed"}, headers=member_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestTeam:

    @pytest.mark.asyncio
    async def test_add_existing_user(self, client, db_session, auth_headers):
        await create_user(db_session, "staff@example.com")

        response = await client.post(
            "/api/v1/companies/me/users",
            json={"email": "staff@example.com", "role": "member"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["role"] == "member"

    @pytest.mark.asyncio
    async def test_add_unknown_user(self, client, auth_headers):
        response = await client.post(
            "/api/v1/companies/me/users",
            json={"email": "ghost@example.com"},
            headers=auth_headers,
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_user_already_in_a_company(self, client, auth_headers, member_headers):
        response = await client.post(
            "/api/v1/companies/me/users",
            json={"email": "member@example.com"},
            headers=auth_headers,
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio
    async def test_member_cannot_add_users(self, client, db_session, member_headers):
        await create_user(db_session, "staff@example.com")

        response = await client.post(
            "/api/v1/companies/me/users",
            json={"email": "staff@example.com"},
            headers=member_headers,
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN
