# backend/app/services/dashboard_service.py
from datetime import date, timedelta
from typing import Any, Dict, List, Sequence

from app.booking.availability import bookings_for_date

# Upcoming check-ins look this far ahead
UPCOMING_DAYS = 7
UPCOMING_LIMIT = 5
CHART_DAYS = 7


def _summary(booking: Any) -> Dict[str, Any]:
    return {
        "id": booking.id,
        "customer_name": booking.customer_name,
        "room_name": booking.room.name if booking.room else None,
        "check_in_date": booking.check_in_date,
        "check_out_date": booking.check_out_date,
        "total_amount": booking.total_amount,
        "is_paid": booking.is_paid,
    }


def build_dashboard(bookings: Sequence[Any], room_count: int, today: date) -> Dict[str, Any]:
    """
    Tenant dashboard cards, lists and chart

    Revenue is the undiscounted sum of total_amount. Occupancy is today's
    check-ins over the number of rooms.
    """
    todays = bookings_for_date(bookings, today)
    horizon = today + timedelta(days=UPCOMING_DAYS)
    upcoming = sorted(
        (b for b in bookings if today < b.check_in_date <= horizon),
        key=lambda b: b.check_in_date,
    )

    chart: List[Dict[str, Any]] = []
    for offset in range(CHART_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        day_bookings = bookings_for_date(bookings, day)
        chart.append({
            "date": day,
            "bookings": len(day_bookings),
            "revenue": sum(float(b.total_amount or 0) for b in day_bookings),
        })

    return {
        "total_revenue": sum(float(b.total_amount or 0) for b in bookings),
        "total_bookings": len(bookings),
        "todays_checkins": len(todays),
        "occupancy_rate": len(todays) / room_count * 100 if room_count else 0.0,
        "todays_bookings": [_summary(b) for b in todays],
        "upcoming_bookings": [_summary(b) for b in upcoming[:UPCOMING_LIMIT]],
        "chart": chart,
    }
