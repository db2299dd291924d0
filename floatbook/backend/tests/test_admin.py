# tests/test_admin.py
"""
Superadmin panel tests
"""

import re
import pytest
from fastapi import status
from sqlalchemy import select, func

from conftest import create_booking
from app.db.models import ActivationKey, Booking, Company, Room, Subscription


class TestAdminAccess:

    @pytest.mark.asyncio
    async def test_regular_user_forbidden(self, client, auth_headers):
        response = await client.get("/api/v1/admin/stats", headers=auth_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    @pytest.mark.asyncio
    async def test_superadmin_has_no_company_context(self, client, superadmin_headers):
        response = await client.get("/api/v1/rooms", headers=superadmin_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestAdminStats:

    @pytest.mark.asyncio
    async def test_platform_totals(self, client, db_session, superadmin_headers, test_company, test_room):
        await create_booking(db_session, test_company, test_room, total_amount=120)
        await create_booking(db_session, test_company, test_room, total_amount=80)

        response = await client.get("/api/v1/admin/stats", headers=superadmin_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total_companies"] == 1
        assert data["total_users"] == 2
        assert data["total_bookings"] == 2
        assert data["total_revenue"] == 200
        assert data["bookings_last_30_days"] == 2
        assert [c["name"] for c in data["recent_companies"]] == ["Seaside Inn"]


class TestAdminCompanies:

    @pytest.mark.asyncio
    async def test_list_with_stats(self, client, db_session, superadmin_headers, test_company, test_room):
        await create_booking(db_session, test_company, test_room, total_amount=150)

        response = await client.get("/api/v1/admin/companies", headers=superadmin_headers)

        company = response.json()[0]
        assert company["name"] == "Seaside Inn"
        assert company["user_count"] == 1
        assert company["booking_count"] == 1
        assert company["total_revenue"] == 150

    @pytest.mark.asyncio
    async def test_delete_removes_owned_rows(self, client, db_session, superadmin_headers, test_company, test_room, plans):
        await create_booking(db_session, test_company, test_room)
        db_session.add(Subscription(company_id=test_company.id, plan_id=plans["Basic"].id, status="active"))
        key = ActivationKey(key="BAS-USED0001", plan_id=plans["Basic"].id, is_used=True,
                            used_by_company_id=test_company.id)
        db_session.add(key)
        await db_session.commit()
        company_id = test_company.id

        response = await client.delete(f"/api/v1/admin/companies/{company_id}", headers=superadmin_headers)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        for model in (Company, Room, Booking, Subscription):
            column = model.id if model is Company else model.company_id
            count = await db_session.execute(select(func.count()).select_from(model).where(column == company_id))
            assert count.scalar() == 0

        await db_session.refresh(key)
        assert key.is_used is True
        assert key.used_by_company_id is None

    @pytest.mark.asyncio
    async def test_delete_unknown_company(self, client, superadmin_headers):
        response = await client.delete(
            "/api/v1/admin/companies/00000000-0000-4000-8000-000000000000", headers=superadmin_headers
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestAdminUsers:

    @pytest.mark.asyncio
    async def test_list_shows_company_name(self, client, superadmin_headers, test_company):
        response = await client.get("/api/v1/admin/users", headers=superadmin_headers)

        by_email = {u["email"]: u for u in response.json()}
        assert by_email["owner@example.com"]["company_name"] == "Seaside Inn"
        assert by_email["root@example.com"]["company_name"] is None

    @pytest.mark.asyncio
    async def test_deactivated_user_cannot_log_in(self, client, superadmin_headers, test_user, test_company):
        response = await client.patch(
            f"/api/v1/admin/users/{test_user.id}", json={"is_active": False}, headers=superadmin_headers
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["is_active"] is False

        login = await client.post("/api/v1/auth/login", json={
            "email": "owner@example.com", "password": "TestPassword123!",
        })
        assert login.status_code == status.HTTP_403_FORBIDDEN

    @pytest.mark.asyncio
    async def test_cannot_change_own_status(self, client, superadmin, superadmin_headers):
        response = await client.patch(
            f"/api/v1/admin/users/{superadmin.id}", json={"is_active": False}, headers=superadmin_headers
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestAdminPlans:

    @pytest.mark.asyncio
    async def test_plan_crud(self, client, superadmin_headers):
        created = await client.post("/api/v1/admin/plans", json={
            "name": "Starter", "price": 9, "room_limit": 10, "booking_limit": 100, "user_limit": 2,
        }, headers=superadmin_headers)
        assert created.status_code == status.HTTP_201_CREATED
        plan_id = created.json()["id"]

        updated = await client.put(
            f"/api/v1/admin/plans/{plan_id}", json={"room_limit": -1}, headers=superadmin_headers
        )
        assert updated.json()["room_limit"] == -1
        assert updated.json()["name"] == "Starter"

        deleted = await client.delete(f"/api/v1/admin/plans/{plan_id}", headers=superadmin_headers)
        assert deleted.status_code == status.HTTP_204_NO_CONTENT

        listed = await client.get("/api/v1/admin/plans", headers=superadmin_headers)
        assert listed.json() == []

    @pytest.mark.asyncio
    async def test_duplicate_name_rejected(self, client, superadmin_headers, plans):
        response = await client.post("/api/v1/admin/plans", json={
            "name": "Basic", "price": 5, "room_limit": 1, "booking_limit": 1, "user_limit": 1,
        }, headers=superadmin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio
    async def test_limits_below_unlimited_rejected(self, client, superadmin_headers):
        response = await client.post("/api/v1/admin/plans", json={
            "name": "Broken", "price": 5, "room_limit": -2, "booking_limit": 1, "user_limit": 1,
        }, headers=superadmin_headers)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_null_limit_rejected(self, client, superadmin_headers, plans):
        for field in ("name", "price", "room_limit", "booking_limit", "user_limit"):
            response = await client.put(
                f"/api/v1/admin/plans/{plans['Basic'].id}", json={field: None}, headers=superadmin_headers
            )
            assert response.status_code == 422, field

        cleared = await client.put(
            f"/api/v1/admin/plans/{plans['Basic'].id}", json={"stripe_price_id": None}, headers=superadmin_headers
        )
        assert cleared.status_code == status.HTTP_200_OK
        assert cleared.json()["stripe_price_id"] is None

    @pytest.mark.asyncio
    async def test_plan_in_use_cannot_be_deleted(self, client, db_session, superadmin_headers, test_company, plans):
        db_session.add(Subscription(company_id=test_company.id, plan_id=plans["Pro"].id, status="active"))
        await db_session.commit()

        response = await client.delete(f"/api/v1/admin/plans/{plans['Pro'].id}", headers=superadmin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestActivationKeyGeneration:

    @pytest.mark.asyncio
    async def test_generate_keys(self, client, superadmin_headers, plans):
        response = await client.post(
            "/api/v1/admin/keys", json={"plan_id": str(plans["Basic"].id), "count": 3}, headers=superadmin_headers
        )

        assert response.status_code == status.HTTP_201_CREATED
        keys = response.json()
        assert len(keys) == 3
        assert len({k["key"] for k in keys}) == 3
        for key in keys:
            assert re.fullmatch(r"BAS-[A-Z0-9]{8}", key["key"])
            assert key["plan_name"] == "Basic"
            assert key["is_used"] is False

        listed = await client.get("/api/v1/admin/keys", headers=superadmin_headers)
        assert len(listed.json()) == 3

    @pytest.mark.asyncio
    async def test_free_plan_keys_refused(self, client, superadmin_headers, plans):
        response = await client.post(
            "/api/v1/admin/keys", json={"plan_id": str(plans["Free"].id)}, headers=superadmin_headers
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio
    async def test_count_bounds(self, client, superadmin_headers, plans):
        response = await client.post(
            "/api/v1/admin/keys", json={"plan_id": str(plans["Pro"].id), "count": 101}, headers=superadmin_headers
        )
        assert response.status_code == 422
