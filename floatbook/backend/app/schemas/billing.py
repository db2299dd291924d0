# backend/app/schemas/billing.py
from pydantic import BaseModel, UUID4
from typing import Optional
from datetime import datetime

from app.schemas.plan import Plan


class StripeCheckoutRequest(BaseModel):
    price_id: str


class StripeCheckoutResponse(BaseModel):
    checkout_url: str


class BkashCreateRequest(BaseModel):
    plan_id: UUID4


class BkashCreateResponse(BaseModel):
    success: bool = True
    bkash_url: str
    payment_id: str


class BkashVerifyRequest(BaseModel):
    payment_id: str
    status: Optional[str] = None


class BkashVerifyResponse(BaseModel):
    success: bool = True
    message: str
    transaction_id: Optional[str] = None


class ActivateKeyRequest(BaseModel):
    activation_key: str


class SubscriptionInfo(BaseModel):
    """Current subscription; subscription fields are empty on the fallback plan"""
    plan: Optional[Plan] = None
    status: str
    subscription_id: Optional[UUID4] = None
    current_period_end: Optional[datetime] = None
    stripe_subscription_id: Optional[str] = None


class PlanUsage(BaseModel):
    rooms: int
    bookings: int
    users: int
