# backend/app/db/models/company.py
from sqlalchemy import Column, String, Boolean, Float, Text, Uuid
from sqlalchemy.orm import relationship
import uuid
from app.db.base import BaseModel


class Company(BaseModel):
    """Tenant root: every room, booking and membership hangs off a company"""
    __tablename__ = "companies"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False)

    # Branding
    logo_url = Column(String(500), nullable=True)
    address = Column(Text, nullable=True)

    # Money settings
    currency = Column(String(10), default="USD", nullable=False)
    tax_enabled = Column(Boolean, default=False, nullable=False)
    tax_rate = Column(Float, default=0.0, nullable=False)

    # Denormalized name of the current plan, for quick display
    plan_name = Column(String(100), default="Free", nullable=False)

    # Relationships
    members = relationship("CompanyUser", back_populates="company", cascade="all, delete-orphan")
    rooms = relationship("Room", back_populates="company", cascade="all, delete-orphan")
    bookings = relationship("Booking", back_populates="company", cascade="all, delete-orphan")
    subscriptions = relationship("Subscription", back_populates="company", cascade="all, delete-orphan")
