# backend/app/schemas/calendar.py
from pydantic import BaseModel
from typing import List
from datetime import date

from app.schemas.booking import Booking
from app.schemas.room import Room


class CalendarCell(BaseModel):
    date: date
    day: int
    is_current_month: bool
    bookings: List[Booking] = []
    available_room_count: int = 0


class CalendarMonth(BaseModel):
    year: int
    month: int
    cells: List[CalendarCell]


class CalendarDay(BaseModel):
    date: date
    bookings: List[Booking]
    available_rooms: List[Room]
