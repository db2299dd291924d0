# backend/app/db/models/subscription.py
from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
import uuid
from app.db.base import BaseModel


class Subscription(BaseModel):
    """Paid period of a plan for a company"""
    __tablename__ = "subscriptions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    company_id = Column(Uuid(as_uuid=True), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    plan_id = Column(Uuid(as_uuid=True), ForeignKey("plans.id"), nullable=False)

    status = Column(String(50), default="active", nullable=False, index=True)  # active, past_due, canceled
    current_period_end = Column(DateTime, nullable=True)

    # Set only for card subscriptions
    stripe_subscription_id = Column(String(255), unique=True, nullable=True)

    # Relationships
    company = relationship("Company", back_populates="subscriptions")
    plan = relationship("Plan", lazy="joined")
