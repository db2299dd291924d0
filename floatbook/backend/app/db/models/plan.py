# backend/app/db/models/plan.py
from sqlalchemy import Column, String, Integer, Float, Uuid
import uuid
from app.db.base import BaseModel


class Plan(BaseModel):
    """Billing tier. A limit of -1 means unlimited."""
    __tablename__ = "plans"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(100), unique=True, nullable=False)
    price = Column(Float, default=0.0, nullable=False)

    # Plan limits
    room_limit = Column(Integer, default=0, nullable=False)
    booking_limit = Column(Integer, default=0, nullable=False)
    user_limit = Column(Integer, default=0, nullable=False)

    # Stripe price used for card checkout
    stripe_price_id = Column(String(255), nullable=True, index=True)
