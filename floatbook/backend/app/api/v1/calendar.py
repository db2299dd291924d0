# backend/app/api/v1/calendar.py
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.api.dependencies import CompanyContext, require_permission, enforce_plan_limit
from app.api.v1.bookings import booking_to_schema
from app.booking.availability import (
    available_rooms_for_date, bookings_for_date, calendar_window, default_check_out, month_grid,
)
from app.core.constants import BookingType
from app.core.rbac import Permission
from app.db.database import get_db
from app.db.repositories.booking_repository import BookingRepository
from app.db.repositories.room_repository import RoomRepository
from app.schemas.booking import Booking, QuickBookingCreate
from app.schemas.room import Room
from app.schemas.calendar import CalendarCell, CalendarDay, CalendarMonth

router = APIRouter()


@router.get("", response_model=CalendarMonth)
async def get_month(
    year: Optional[int] = Query(None, ge=1970, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    ctx: CompanyContext = Depends(require_permission(Permission.BOOKING_VIEW)),
    db: AsyncSession = Depends(get_db)
):
    """Six-week month grid with each day's check-ins and free room count"""
    today = date.today()
    year = year or today.year
    month = month or today.month

    start, end = calendar_window(year, month)
    bookings = await BookingRepository(db).list_checking_in_between(ctx.company_id, start, end)
    rooms = await RoomRepository(db).list_for_company(ctx.company_id)

    cells = []
    for cell in month_grid(year, month):
        day_bookings = bookings_for_date(bookings, cell["date"])
        cells.append(CalendarCell(
            **cell,
            bookings=[booking_to_schema(b, ctx.company) for b in day_bookings],
            available_room_count=len(available_rooms_for_date(rooms, bookings, cell["date"])),
        ))

    return CalendarMonth(year=year, month=month, cells=cells)


@router.get("/day", response_model=CalendarDay)
async def get_day(
    day: date = Query(..., alias="date"),
    ctx: CompanyContext = Depends(require_permission(Permission.BOOKING_VIEW)),
    db: AsyncSession = Depends(get_db)
):
    """Check-ins on a date and the rooms still free for a same-day booking"""
    bookings = await BookingRepository(db).list_checking_in_between(ctx.company_id, day, day)
    rooms = await RoomRepository(db).list_for_company(ctx.company_id, order_by_name=True)

    return CalendarDay(
        date=day,
        bookings=[booking_to_schema(b, ctx.company) for b in bookings],
        available_rooms=[Room.model_validate(r) for r in available_rooms_for_date(rooms, bookings, day)],
    )


@router.post("/bookings", response_model=Booking, status_code=status.HTTP_201_CREATED)
async def quick_create_booking(
    request: QuickBookingCreate,
    ctx: CompanyContext = Depends(require_permission(Permission.BOOKING_MANAGE)),
    db: AsyncSession = Depends(get_db)
):
    """One-night unpaid booking from a calendar day"""
    booking_repo = BookingRepository(db)

    if not await RoomRepository(db).get_for_company(request.room_id, ctx.company_id):
        raise HTTPException(status_code=404, detail="Room not found")

    await enforce_plan_limit(
        db, ctx.company_id, "booking_limit",
        await booking_repo.count_for_company(ctx.company_id), "bookings",
    )

    booking = await booking_repo.create_booking({
        **request.model_dump(mode="python"),
        "discount_type": request.discount_type.value,
        "check_out_date": default_check_out(request.check_in_date),
        "booking_type": BookingType.INDIVIDUAL.value,
        "guest_count": 1,
        "is_paid": False,
        "company_id": ctx.company_id,
    })
    return booking_to_schema(booking, ctx.company)
