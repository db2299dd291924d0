import calendar
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Tuple

# Month view always renders six full weeks
GRID_CELLS = 42
# Bookings are fetched this many days around the visible month
WINDOW_PADDING_DAYS = 7


def bookings_for_date(bookings: Iterable[Any], day: date) -> List[Any]:
    """Bookings whose check-in falls on the given day"""
    return [b for b in bookings if b.check_in_date == day]


def available_rooms_for_date(rooms: Iterable[Any], bookings: Iterable[Any], day: date) -> List[Any]:
    """
    Rooms without a check-in on the given day.

    Only same-day check-ins block a room; nights inside a longer stay
    do not.
    """
    booked_room_ids = {b.room_id for b in bookings_for_date(bookings, day)}
    return [room for room in rooms if room.id not in booked_room_ids]


def month_grid(year: int, month: int) -> List[Dict[str, Any]]:
    """Sunday-first 6x7 grid with leading/trailing days of adjacent months"""
    first_day = date(year, month, 1)
    # date.weekday(): Monday=0 .. Sunday=6; shift so Sunday=0
    leading = (first_day.weekday() + 1) % 7
    start = first_day - timedelta(days=leading)

    cells = []
    for offset in range(GRID_CELLS):
        current = start + timedelta(days=offset)
        cells.append({
            "date": current,
            "day": current.day,
            "is_current_month": current.month == month and current.year == year,
        })
    return cells


def calendar_window(year: int, month: int) -> Tuple[date, date]:
    """Check-in range fetched for a month view"""
    days_in_month = calendar.monthrange(year, month)[1]
    start = date(year, month, 1) - timedelta(days=WINDOW_PADDING_DAYS)
    end = date(year, month, days_in_month) + timedelta(days=WINDOW_PADDING_DAYS)
    return start, end


def default_check_out(check_in: date) -> date:
    """Quick bookings from the calendar are single-night stays"""
    return check_in + timedelta(days=1)
