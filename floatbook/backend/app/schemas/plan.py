# backend/app/schemas/plan.py
from pydantic import BaseModel, UUID4, Field, field_validator
from typing import Optional
from datetime import datetime


class PlanBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    price: float = Field(0.0, ge=0)
    room_limit: int = Field(..., ge=-1)
    booking_limit: int = Field(..., ge=-1)
    user_limit: int = Field(..., ge=-1)
    stripe_price_id: Optional[str] = None


class PlanCreate(PlanBase):
    pass


class PlanUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[float] = Field(None, ge=0)
    room_limit: Optional[int] = Field(None, ge=-1)
    booking_limit: Optional[int] = Field(None, ge=-1)
    user_limit: Optional[int] = Field(None, ge=-1)
    stripe_price_id: Optional[str] = None

    @field_validator("name", "price", "room_limit", "booking_limit", "user_limit")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class Plan(PlanBase):
    id: UUID4
    created_at: datetime

    class Config:
        from_attributes = True
