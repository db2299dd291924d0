# backend/app/db/models/activation_key.py
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
import uuid
from app.db.base import BaseModel


class ActivationKey(BaseModel):
    """One-time code that upgrades a company to a plan without a payment provider"""
    __tablename__ = "activation_keys"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    key = Column(String(100), unique=True, nullable=False, index=True)
    plan_id = Column(Uuid(as_uuid=True), ForeignKey("plans.id", ondelete="CASCADE"), nullable=False)

    is_used = Column(Boolean, default=False, nullable=False)
    used_by_company_id = Column(Uuid(as_uuid=True), ForeignKey("companies.id", ondelete="SET NULL"), nullable=True)
    used_at = Column(DateTime, nullable=True)

    # Relationships
    plan = relationship("Plan", lazy="joined")
