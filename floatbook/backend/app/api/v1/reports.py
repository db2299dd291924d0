# backend/app/api/v1/reports.py
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from uuid import UUID

from app.api.dependencies import CompanyContext, require_permission
from app.booking.reporting import occupancy_rate, resolve_date_range, summarize
from app.core.constants import DatePreset, DiscountStatusFilter, PaymentStatusFilter
from app.core.rbac import Permission
from app.db.database import get_db
from app.db.repositories.report_repository import ReportRepository
from app.schemas.report import ReportResponse

router = APIRouter()


@router.get("", response_model=ReportResponse)
async def get_report(
    preset: DatePreset = DatePreset.MONTH,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    room_ids: Optional[List[UUID]] = Query(None),
    payment_status: PaymentStatusFilter = PaymentStatusFilter.ALL,
    discount_status: DiscountStatusFilter = DiscountStatusFilter.ALL,
    ctx: CompanyContext = Depends(require_permission(Permission.REPORT_VIEW)),
    db: AsyncSession = Depends(get_db)
):
    """
    Filtered report over bookings checking in within the range

    Daily, room and financial sections honour every filter. The discount
    section ignores the discount filter; occupancy ignores payment and
    discount filters.
    """
    if preset == DatePreset.CUSTOM and start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=400, detail="start_date must be on or before end_date")

    start, end = resolve_date_range(preset, date.today(), start_date, end_date)
    report_repo = ReportRepository(db)
    filters = {
        "room_ids": room_ids,
        "payment_status": payment_status,
        "discount_status": discount_status,
    }

    daily_stats = await report_repo.daily_stats(ctx.company_id, start, end, **filters)
    room_stats = await report_repo.room_stats(ctx.company_id, start, end, **filters)
    financial = await report_repo.financial_summary(ctx.company, start, end, **filters)
    discounts = await report_repo.discount_report(
        ctx.company_id, start, end, room_ids=room_ids, payment_status=payment_status
    )
    stays, room_count = await report_repo.occupancy_inputs(ctx.company_id, start, end, room_ids)

    return ReportResponse(
        start_date=start,
        end_date=end,
        currency=ctx.company.currency,
        summary={
            **summarize(daily_stats, room_stats),
            "occupancy_rate": occupancy_rate(stays, room_count, start, end),
        },
        daily_stats=daily_stats,
        room_stats=room_stats,
        financial=financial,
        discounts=discounts,
    )
