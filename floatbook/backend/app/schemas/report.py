# backend/app/schemas/report.py
from pydantic import BaseModel, UUID4
from typing import List, Optional
from datetime import date


class DailyStat(BaseModel):
    date: date
    total_bookings: int
    total_revenue: float
    new_customers: int


class RoomStat(BaseModel):
    room_id: UUID4
    room_name: str
    total_bookings: int
    total_revenue: float


class FinancialSummary(BaseModel):
    paid_revenue: float = 0.0
    unpaid_revenue: float = 0.0
    total_advance: float = 0.0
    total_due: float = 0.0


class DiscountStat(BaseModel):
    discount_type: str
    booking_count: int
    total_discounted: float


class ReportSummary(BaseModel):
    total_revenue: float
    total_bookings: int
    new_customers: int
    total_rooms_booked: int
    occupancy_rate: float


class ReportResponse(BaseModel):
    start_date: date
    end_date: date
    currency: str
    summary: ReportSummary
    daily_stats: List[DailyStat]
    room_stats: List[RoomStat]
    financial: FinancialSummary
    discounts: List[DiscountStat]


class DashboardChartPoint(BaseModel):
    date: date
    bookings: int
    revenue: float


class BookingSummary(BaseModel):
    id: UUID4
    customer_name: str
    room_name: Optional[str] = None
    check_in_date: date
    check_out_date: date
    total_amount: float
    is_paid: bool


class DashboardResponse(BaseModel):
    total_revenue: float
    total_bookings: int
    todays_checkins: int
    occupancy_rate: float
    currency: str
    todays_bookings: List[BookingSummary]
    upcoming_bookings: List[BookingSummary]
    chart: List[DashboardChartPoint]
