# backend/app/db/models/payment_intent.py
from sqlalchemy import Column, String, Float, ForeignKey, Uuid
from sqlalchemy.orm import relationship
import uuid
from app.db.base import BaseModel


class PaymentIntent(BaseModel):
    """In-flight mobile wallet payment for a plan upgrade"""
    __tablename__ = "payment_intents"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    company_id = Column(Uuid(as_uuid=True), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    plan_id = Column(Uuid(as_uuid=True), ForeignKey("plans.id"), nullable=False)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    amount = Column(Float, nullable=False)
    currency = Column(String(10), default="BDT", nullable=False)
    status = Column(String(50), default="pending", nullable=False)  # pending, completed, failed, ...

    # bKash identifiers
    bkash_payment_id = Column(String(255), nullable=True, index=True)
    bkash_trx_id = Column(String(255), nullable=True)

    # Relationships
    plan = relationship("Plan", lazy="joined")
