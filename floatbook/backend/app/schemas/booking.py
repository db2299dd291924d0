# backend/app/schemas/booking.py
from pydantic import BaseModel, EmailStr, UUID4, Field, model_validator
from typing import Optional, Dict
from datetime import date, datetime

from app.core.constants import DiscountType, BookingType


class BookingBase(BaseModel):
    room_id: UUID4
    check_in_date: date
    check_out_date: date
    customer_name: str = Field(..., min_length=1, max_length=255)
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = None
    total_amount: float = Field(..., ge=0)
    discount_type: DiscountType = DiscountType.FIXED
    discount_value: float = Field(0.0, ge=0)
    advance_paid: float = Field(0.0, ge=0)
    referred_by: Optional[str] = None
    notes: Optional[str] = None
    guest_count: int = Field(1, ge=1)
    booking_type: BookingType = BookingType.INDIVIDUAL

    @model_validator(mode="after")
    def check_dates(self):
        if self.check_in_date > self.check_out_date:
            raise ValueError("check_out_date must be on or after check_in_date")
        return self


class BookingCreate(BookingBase):
    pass


class BookingUpdate(BookingBase):
    """Full replacement of the editable fields"""
    pass


class QuickBookingCreate(BaseModel):
    """Single-night booking created from a calendar day"""
    room_id: UUID4
    check_in_date: date
    customer_name: str = Field(..., min_length=1, max_length=255)
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = None
    total_amount: float = Field(..., ge=0)
    discount_type: DiscountType = DiscountType.FIXED
    discount_value: float = Field(0.0, ge=0)
    advance_paid: float = Field(0.0, ge=0)


class Booking(BaseModel):
    id: UUID4
    company_id: UUID4
    room_id: UUID4
    room_name: Optional[str] = None
    check_in_date: date
    check_out_date: date
    customer_name: str
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    total_amount: float
    discount_type: str
    discount_value: float
    advance_paid: float
    is_paid: bool
    referred_by: Optional[str] = None
    notes: Optional[str] = None
    guest_count: int
    booking_type: str
    created_at: datetime

    # Derived from the company's current tax settings
    discount_amount: float = 0.0
    tax_amount: float = 0.0
    final_total_amount: float = 0.0
    due_amount: float = 0.0

    class Config:
        from_attributes = True


class BookingDetail(Booking):
    """Booking with display strings in the company currency"""
    currency: str
    formatted: Dict[str, str] = {}
