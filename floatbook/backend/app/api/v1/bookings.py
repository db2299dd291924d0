# backend/app/api/v1/bookings.py
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from uuid import UUID

from app.api.dependencies import CompanyContext, require_permission, enforce_plan_limit
from app.booking.financials import calculate_financials, financials_for, is_fully_paid
from app.core.currency import format_currency
from app.core.constants import PaymentStatusFilter
from app.core.rbac import Permission
from app.db.database import get_db
from app.db.models.booking import Booking as BookingModel
from app.db.models.company import Company
from app.db.repositories.booking_repository import BookingRepository
from app.db.repositories.room_repository import RoomRepository
from app.schemas.booking import Booking, BookingCreate, BookingUpdate, BookingDetail

router = APIRouter()


def booking_to_schema(booking: BookingModel, company: Company) -> Booking:
    """Read model with money fields derived from the company's current tax settings"""
    financials = financials_for(booking, company)
    return Booking.model_validate(booking).model_copy(update={
        "room_name": booking.room.name if booking.room else None,
        "discount_amount": financials.discount_amount,
        "tax_amount": financials.tax_amount,
        "final_total_amount": financials.final_total,
        "due_amount": financials.due_amount,
    })


def paid_flag(data: dict, company: Company) -> bool:
    """Save-time paid flag for a create or full update"""
    financials = calculate_financials(
        base_amount=data["total_amount"],
        discount_type=data["discount_type"],
        discount_value=data["discount_value"],
        tax_enabled=company.tax_enabled,
        tax_rate=company.tax_rate,
        advance_paid=data["advance_paid"],
    )
    return is_fully_paid(financials, data["advance_paid"])


async def _ensure_room(db: AsyncSession, room_id: UUID, company_id) -> None:
    if not await RoomRepository(db).get_for_company(room_id, company_id):
        raise HTTPException(status_code=404, detail="Room not found")


@router.get("", response_model=List[Booking])
async def list_bookings(
    query: Optional[str] = Query(None, description="Customer, room or referrer"),
    payment_status: PaymentStatusFilter = PaymentStatusFilter.ALL,
    ctx: CompanyContext = Depends(require_permission(Permission.BOOKING_VIEW)),
    db: AsyncSession = Depends(get_db)
):
    """List bookings, latest check-in first"""
    bookings = await BookingRepository(db).list_for_company(
        ctx.company_id, query=query, payment_status=payment_status
    )
    return [booking_to_schema(b, ctx.company) for b in bookings]


@router.post("", response_model=Booking, status_code=status.HTTP_201_CREATED)
async def create_booking(
    request: BookingCreate,
    ctx: CompanyContext = Depends(require_permission(Permission.BOOKING_MANAGE)),
    db: AsyncSession = Depends(get_db)
):
    booking_repo = BookingRepository(db)

    await _ensure_room(db, request.room_id, ctx.company_id)
    await enforce_plan_limit(
        db, ctx.company_id, "booking_limit",
        await booking_repo.count_for_company(ctx.company_id), "bookings",
    )

    data = request.model_dump(mode="python")
    data["discount_type"] = request.discount_type.value
    data["booking_type"] = request.booking_type.value
    data["is_paid"] = paid_flag(data, ctx.company)
    data["company_id"] = ctx.company_id

    booking = await booking_repo.create_booking(data)
    return booking_to_schema(booking, ctx.company)


@router.get("/{booking_id}", response_model=BookingDetail)
async def get_booking(
    booking_id: UUID,
    ctx: CompanyContext = Depends(require_permission(Permission.BOOKING_VIEW)),
    db: AsyncSession = Depends(get_db)
):
    """Booking detail with amounts formatted in the company currency"""
    booking = await BookingRepository(db).get_for_company(booking_id, ctx.company_id)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")

    base = booking_to_schema(booking, ctx.company)
    currency = ctx.company.currency
    return BookingDetail(
        **base.model_dump(),
        currency=currency,
        formatted={
            "total_amount": format_currency(base.total_amount, currency),
            "discount_amount": format_currency(base.discount_amount, currency),
            "tax_amount": format_currency(base.tax_amount, currency),
            "final_total_amount": format_currency(base.final_total_amount, currency),
            "advance_paid": format_currency(base.advance_paid, currency),
            "due_amount": format_currency(base.due_amount, currency),
        },
    )


@router.put("/{booking_id}", response_model=Booking)
async def update_booking(
    booking_id: UUID,
    request: BookingUpdate,
    ctx: CompanyContext = Depends(require_permission(Permission.BOOKING_MANAGE)),
    db: AsyncSession = Depends(get_db)
):
    booking_repo = BookingRepository(db)
    if not await booking_repo.get_for_company(booking_id, ctx.company_id):
        raise HTTPException(status_code=404, detail="Booking not found")

    await _ensure_room(db, request.room_id, ctx.company_id)

    data = request.model_dump(mode="python")
    data["discount_type"] = request.discount_type.value
    data["booking_type"] = request.booking_type.value
    data["is_paid"] = paid_flag(data, ctx.company)

    booking = await booking_repo.update_for_company(booking_id, ctx.company_id, data)
    return booking_to_schema(booking, ctx.company)


@router.patch("/{booking_id}/toggle-payment", response_model=Booking)
async def toggle_payment(
    booking_id: UUID,
    ctx: CompanyContext = Depends(require_permission(Permission.BOOKING_MANAGE)),
    db: AsyncSession = Depends(get_db)
):
    """Flip the stored paid flag; amounts are left untouched"""
    booking = await BookingRepository(db).toggle_paid(booking_id, ctx.company_id)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking_to_schema(booking, ctx.company)


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_booking(
    booking_id: UUID,
    ctx: CompanyContext = Depends(require_permission(Permission.BOOKING_MANAGE)),
    db: AsyncSession = Depends(get_db)
):
    deleted = await BookingRepository(db).delete_for_company(booking_id, ctx.company_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Booking not found")
