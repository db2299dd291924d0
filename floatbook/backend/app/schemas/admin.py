# backend/app/schemas/admin.py
from pydantic import BaseModel, UUID4, Field
from typing import List, Optional
from datetime import datetime

from app.schemas.company import Company


class AdminStats(BaseModel):
    total_companies: int
    total_users: int
    total_bookings: int
    total_revenue: float
    bookings_last_30_days: int
    users_last_7_days: int
    recent_companies: List[Company]


class ActivationKeyGenerate(BaseModel):
    plan_id: UUID4
    count: int = Field(1, ge=1, le=100)


class ActivationKey(BaseModel):
    id: UUID4
    key: str
    plan_id: UUID4
    plan_name: Optional[str] = None
    is_used: bool
    used_by_company_id: Optional[UUID4] = None
    used_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True
