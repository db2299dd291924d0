# backend/app/db/models/booking.py
from sqlalchemy import Column, String, Integer, Float, Boolean, Date, Text, ForeignKey, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
import uuid
from app.db.base import BaseModel


class Booking(BaseModel):
    """
    Reservation of a room.

    Tax, final total and due amount are derived from the company's tax
    settings when read; only is_paid is stored.
    """
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("check_in_date <= check_out_date", name="ck_bookings_date_order"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    company_id = Column(Uuid(as_uuid=True), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    room_id = Column(Uuid(as_uuid=True), ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False, index=True)

    # Stay
    check_in_date = Column(Date, nullable=False, index=True)
    check_out_date = Column(Date, nullable=False)
    guest_count = Column(Integer, default=1, nullable=False)
    booking_type = Column(String(50), default="individual", nullable=False)

    # Customer
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=True)
    customer_phone = Column(String(50), nullable=True)
    referred_by = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)

    # Money
    total_amount = Column(Float, nullable=False)
    discount_type = Column(String(20), default="fixed", nullable=False)  # fixed, percentage
    discount_value = Column(Float, default=0.0, nullable=False)
    advance_paid = Column(Float, default=0.0, nullable=False)
    is_paid = Column(Boolean, default=False, nullable=False)

    # Relationships
    company = relationship("Company", back_populates="bookings")
    room = relationship("Room", back_populates="bookings")
