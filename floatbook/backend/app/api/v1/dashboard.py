# backend/app/api/v1/dashboard.py
from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import CompanyContext, require_permission
from app.core.rbac import Permission
from app.db.database import get_db
from app.db.repositories.booking_repository import BookingRepository
from app.db.repositories.room_repository import RoomRepository
from app.schemas.report import DashboardResponse
from app.services.dashboard_service import build_dashboard

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    ctx: CompanyContext = Depends(require_permission(Permission.BOOKING_VIEW)),
    db: AsyncSession = Depends(get_db)
):
    bookings = await BookingRepository(db).list_for_company(ctx.company_id)
    room_count = await RoomRepository(db).count_for_company(ctx.company_id)

    return DashboardResponse(
        **build_dashboard(bookings, room_count, date.today()),
        currency=ctx.company.currency,
    )
