from datetime import date, timedelta
from typing import Any, Dict, Iterable, Optional, Tuple

from app.core.constants import DatePreset


def resolve_date_range(
    preset: str,
    today: date,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> Tuple[date, date]:
    """
    Turn a report preset into an inclusive [start, end] range.

    week and month are rolling windows ending today (7 and 30 days).
    custom uses the explicit bounds and falls back to the month window.
    """
    if preset == DatePreset.TODAY:
        return today, today
    if preset == DatePreset.WEEK:
        return today - timedelta(days=6), today
    if preset == DatePreset.CUSTOM and start and end:
        return start, end
    return today - timedelta(days=29), today


def booked_nights_in_range(check_in: date, check_out: date, start: date, end: date) -> int:
    """Nights of a stay that fall inside [start, end]; same-day stays count once"""
    last_night = max(check_in, check_out - timedelta(days=1))
    first = max(check_in, start)
    last = min(last_night, end)
    if last < first:
        return 0
    return (last - first).days + 1


def occupancy_rate(stays: Iterable[Tuple[date, date]], room_count: int, start: date, end: date) -> float:
    """Booked room-nights over available room-nights, as a percentage"""
    days = (end - start).days + 1
    if room_count <= 0 or days <= 0:
        return 0.0
    nights = sum(booked_nights_in_range(ci, co, start, end) for ci, co in stays)
    return nights / (room_count * days) * 100


def summarize(daily_stats: Iterable[Dict[str, Any]], room_stats: Iterable[Any]) -> Dict[str, Any]:
    """Card totals: post-hoc sums over already aggregated rows"""
    summary = {"total_revenue": 0.0, "total_bookings": 0, "new_customers": 0}
    for day in daily_stats:
        summary["total_revenue"] += float(day["total_revenue"] or 0)
        summary["total_bookings"] += int(day["total_bookings"] or 0)
        summary["new_customers"] += int(day["new_customers"] or 0)
    summary["total_rooms_booked"] = len(list(room_stats))
    return summary
