# tests/test_reporting.py
"""
Report helper tests
Tests: date presets, room-night occupancy, summary cards
"""

import pytest
from datetime import date

from app.booking.reporting import (
    booked_nights_in_range, occupancy_rate, resolve_date_range, summarize,
)

TODAY = date(2024, 6, 15)


class TestDatePresets:

    def test_today(self):
        assert resolve_date_range("today", TODAY) == (TODAY, TODAY)

    def test_week_is_last_seven_days(self):
        assert resolve_date_range("week", TODAY) == (date(2024, 6, 9), TODAY)

    def test_month_is_last_thirty_days(self):
        assert resolve_date_range("month", TODAY) == (date(2024, 5, 17), TODAY)

    def test_custom_uses_explicit_bounds(self):
        start, end = date(2024, 1, 1), date(2024, 1, 31)
        assert resolve_date_range("custom", TODAY, start, end) == (start, end)

    def test_custom_without_bounds_falls_back_to_month(self):
        assert resolve_date_range("custom", TODAY) == (date(2024, 5, 17), TODAY)


class TestOccupancy:

    def test_nights_clipped_to_range(self):
        # Stay of 5 nights (10th..14th), range covers 12th..20th -> 3 nights
        assert booked_nights_in_range(date(2024, 6, 10), date(2024, 6, 15), date(2024, 6, 12), date(2024, 6, 20)) == 3

    def test_same_day_stay_counts_one_night(self):
        assert booked_nights_in_range(TODAY, TODAY, TODAY, TODAY) == 1

    def test_stay_outside_range_counts_nothing(self):
        assert booked_nights_in_range(date(2024, 1, 1), date(2024, 1, 3), TODAY, TODAY) == 0

    def test_rate_over_room_nights(self):
        stays = [(date(2024, 6, 1), date(2024, 6, 3)), (date(2024, 6, 2), date(2024, 6, 2))]
        # 3 booked nights over 2 rooms x 3 days
        rate = occupancy_rate(stays, 2, date(2024, 6, 1), date(2024, 6, 3))
        assert rate == pytest.approx(50.0)

    def test_no_rooms_gives_zero(self):
        assert occupancy_rate([(TODAY, TODAY)], 0, TODAY, TODAY) == 0.0


class TestSummary:

    def test_sums_daily_rows_and_counts_rooms(self):
        daily = [
            {"total_revenue": 100.0, "total_bookings": 2, "new_customers": 1},
            {"total_revenue": 50.5, "total_bookings": 1, "new_customers": 0},
        ]
        rooms = [{"room_name": "A"}, {"room_name": "B"}]

        assert summarize(daily, rooms) == {
            "total_revenue": 150.5,
            "total_bookings": 3,
            "new_customers": 1,
            "total_rooms_booked": 2,
        }
