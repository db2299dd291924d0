"""
FloatBook booking domain logic

Pure functions over in-memory rows, shared by the API layer and reports:
- financials: discount / tax / advance / due arithmetic
- availability: same-day calendar availability and month grid
- reporting: date presets, occupancy and summary-card totals

Usage:
    from app.booking import calculate_financials

    f = calculate_financials(100, "percentage", 10, True, 5, 50)
    f.final_total, f.due_amount  # 94.5, 44.5
"""

from .financials import BookingFinancials, calculate_financials, financials_for, is_fully_paid
from .availability import (
    available_rooms_for_date,
    bookings_for_date,
    calendar_window,
    default_check_out,
    month_grid,
)
from .reporting import occupancy_rate, resolve_date_range, summarize

__all__ = [
    "BookingFinancials",
    "calculate_financials",
    "financials_for",
    "is_fully_paid",
    "available_rooms_for_date",
    "bookings_for_date",
    "calendar_window",
    "default_check_out",
    "month_grid",
    "occupancy_rate",
    "resolve_date_range",
    "summarize",
]
