# tests/test_bookings.py
"""
Booking tests
Tests: date validation, save-time paid flag, derived amounts, filters, toggle
"""

import pytest
from datetime import date, timedelta
from fastapi import status

from conftest import create_booking
from app.db.models import Room


def booking_payload(room_id, **overrides):
    payload = {
        "room_id": str(room_id),
        "check_in_date": "2024-06-10",
        "check_out_date": "2024-06-12",
        "customer_name": "Bob Traveller",
        "customer_email": "bob@example.com",
        "total_amount": 100,
        "discount_type": "percentage",
        "discount_value": 10,
        "advance_paid": 50,
    }
    payload.update(overrides)
    return payload


class TestBookingCreate:

    @pytest.mark.asyncio
    async def test_check_out_before_check_in_rejected(self, client, auth_headers, test_room):
        response = await client.post("/api/v1/bookings", json=booking_payload(
            test_room.id, check_in_date="2024-06-12", check_out_date="2024-06-10",
        ), headers=auth_headers)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_same_day_stay_allowed(self, client, auth_headers, test_room):
        response = await client.post("/api/v1/bookings", json=booking_payload(
            test_room.id, check_in_date="2024-06-10", check_out_date="2024-06-10",
        ), headers=auth_headers)

        assert response.status_code == status.HTTP_201_CREATED

    @pytest.mark.asyncio
    async def test_negative_amounts_rejected(self, client, auth_headers, test_room):
        response = await client.post(
            "/api/v1/bookings", json=booking_payload(test_room.id, advance_paid=-1), headers=auth_headers
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_derived_amounts_with_tax(self, client, db_session, auth_headers, test_company, test_room):
        test_company.tax_enabled = True
        test_company.tax_rate = 5
        await db_session.commit()

        response = await client.post("/api/v1/bookings", json=booking_payload(test_room.id), headers=auth_headers)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["room_name"] == "Ocean View"
        assert data["discount_amount"] == pytest.approx(10.0)
        assert data["tax_amount"] == pytest.approx(4.5)
        assert data["final_total_amount"] == pytest.approx(94.5)
        assert data["due_amount"] == pytest.approx(44.5)
        assert data["is_paid"] is False

    @pytest.mark.asyncio
    async def test_full_advance_marks_paid(self, client, auth_headers, test_room):
        response = await client.post("/api/v1/bookings", json=booking_payload(
            test_room.id, advance_paid=90,
        ), headers=auth_headers)

        assert response.json()["is_paid"] is True
        assert response.json()["due_amount"] == 0

    @pytest.mark.asyncio
    async def test_room_of_other_company_rejected(self, client, db_session, auth_headers):
        from app.db.models import Company

        other = Company(name="Elsewhere")
        db_session.add(other)
        await db_session.commit()
        foreign_room = Room(company_id=other.id, name="Foreign", price=10, capacity=1)
        db_session.add(foreign_room)
        await db_session.commit()

        response = await client.post("/api/v1/bookings", json=booking_payload(foreign_room.id), headers=auth_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestBookingReadAndUpdate:

    @pytest.mark.asyncio
    async def test_list_ordered_by_check_in_desc(self, client, db_session, auth_headers, test_company, test_room):
        await create_booking(db_session, test_company, test_room, customer_name="Early",
                             check_in_date=date(2024, 1, 1), check_out_date=date(2024, 1, 2))
        await create_booking(db_session, test_company, test_room, customer_name="Late",
                             check_in_date=date(2024, 3, 1), check_out_date=date(2024, 3, 2))

        response = await client.get("/api/v1/bookings", headers=auth_headers)

        assert [b["customer_name"] for b in response.json()] == ["Late", "Early"]

    @pytest.mark.asyncio
    async def test_search_and_payment_filter(self, client, db_session, auth_headers, test_company, test_room):
        await create_booking(db_session, test_company, test_room, customer_name="Carol", is_paid=True)
        await create_booking(db_session, test_company, test_room, customer_name="Dave", referred_by="Carol's agency")
        await create_booking(db_session, test_company, test_room, customer_name="Erin")

        by_name = await client.get("/api/v1/bookings", params={"query": "CAROL"}, headers=auth_headers)
        assert sorted(b["customer_name"] for b in by_name.json()) == ["Carol", "Dave"]

        by_room = await client.get("/api/v1/bookings", params={"query": "ocean"}, headers=auth_headers)
        assert len(by_room.json()) == 3

        unpaid = await client.get("/api/v1/bookings", params={"payment_status": "unpaid"}, headers=auth_headers)
        assert sorted(b["customer_name"] for b in unpaid.json()) == ["Dave", "Erin"]

    @pytest.mark.asyncio
    async def test_detail_has_formatted_amounts(self, client, db_session, auth_headers, test_company, test_room):
        booking = await create_booking(db_session, test_company, test_room, total_amount=1234.5)

        response = await client.get(f"/api/v1/bookings/{booking.id}", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["currency"] == "USD"
        assert data["formatted"]["total_amount"] == "$1,234.50"
        assert data["formatted"]["due_amount"] == "$1,234.50"

    @pytest.mark.asyncio
    async def test_update_recomputes_paid_flag(self, client, db_session, auth_headers, test_company, test_room):
        booking = await create_booking(db_session, test_company, test_room)

        response = await client.put(f"/api/v1/bookings/{booking.id}", json=booking_payload(
            test_room.id, discount_type="fixed", discount_value=0, advance_paid=100,
        ), headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["is_paid"] is True
        assert response.json()["customer_name"] == "Bob Traveller"

    @pytest.mark.asyncio
    async def test_paid_flag_is_stale_after_tax_change(self, client, db_session, auth_headers, test_company, test_room):
        created = await client.post("/api/v1/bookings", json=booking_payload(
            test_room.id, discount_type="fixed", discount_value=0, advance_paid=100,
        ), headers=auth_headers)
        assert created.json()["is_paid"] is True

        await client.patch("/api/v1/companies/me", json={"tax_enabled": True, "tax_rate": 10}, headers=auth_headers)

        response = await client.get(f"/api/v1/bookings/{created.json()['id']}", headers=auth_headers)
        data = response.json()
        assert data["is_paid"] is True
        assert data["final_total_amount"] == pytest.approx(110.0)
        assert data["due_amount"] == pytest.approx(10.0)

    @pytest.mark.asyncio
    async def test_toggle_twice_restores_flag(self, client, db_session, auth_headers, test_company, test_room):
        booking = await create_booking(db_session, test_company, test_room)

        first = await client.patch(f"/api/v1/bookings/{booking.id}/toggle-payment", headers=auth_headers)
        assert first.json()["is_paid"] is True
        assert first.json()["advance_paid"] == 0

        second = await client.patch(f"/api/v1/bookings/{booking.id}/toggle-payment", headers=auth_headers)
        assert second.json()["is_paid"] is False

    @pytest.mark.asyncio
    async def test_delete_booking(self, client, db_session, auth_headers, test_company, test_room):
        booking = await create_booking(db_session, test_company, test_room)

        response = await client.delete(f"/api/v1/bookings/{booking.id}", headers=auth_headers)
        assert response.status_code == status.HTTP_204_NO_CONTENT

        missing = await client.get(f"/api/v1/bookings/{booking.id}", headers=auth_headers)
        assert missing.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_member_can_manage_bookings(self, client, member_headers, test_room):
        response = await client.post(
            "/api/v1/bookings",
            json=booking_payload(test_room.id, check_in_date=str(date.today()), check_out_date=str(date.today() + timedelta(days=1))),
            headers=member_headers,
        )
        assert response.status_code == status.HTTP_201_CREATED
