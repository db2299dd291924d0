# backend/app/db/models/room.py
from sqlalchemy import Column, String, Integer, Float, ForeignKey, JSON, Uuid
from sqlalchemy.orm import relationship
import uuid
from app.db.base import BaseModel


class Room(BaseModel):
    """Bookable room of a company"""
    __tablename__ = "rooms"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    company_id = Column(Uuid(as_uuid=True), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    capacity = Column(Integer, default=1, nullable=False)

    # Free-form amenity tags, e.g. ["WiFi", "AC"]
    amenities = Column(JSON, default=list)
    meal_options = Column(String(100), default="None")

    # Relationships
    company = relationship("Company", back_populates="rooms")
    bookings = relationship("Booking", back_populates="room", cascade="all, delete-orphan")
