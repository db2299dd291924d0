# backend/app/schemas/room.py
from pydantic import BaseModel, UUID4, Field, field_validator
from typing import Optional, List
from datetime import datetime

from app.core.constants import MEAL_OPTIONS


def _check_meal_option(value: Optional[str]) -> Optional[str]:
    if value is not None and value not in MEAL_OPTIONS:
        raise ValueError(f"meal_options must be one of: {', '.join(MEAL_OPTIONS)}")
    return value


class RoomBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    capacity: int = Field(1, ge=1)
    amenities: List[str] = []
    meal_options: str = "None"

    @field_validator("meal_options")
    @classmethod
    def validate_meal_options(cls, v):
        return _check_meal_option(v)


class RoomCreate(RoomBase):
    pass


class RoomUpdate(BaseModel):
    """Partial update; omitted fields are left alone, null is not accepted"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    price: Optional[float] = Field(None, ge=0)
    capacity: Optional[int] = Field(None, ge=1)
    amenities: Optional[List[str]] = None
    meal_options: Optional[str] = None

    @field_validator("name", "price", "capacity", "amenities", "meal_options")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator("meal_options")
    @classmethod
    def validate_meal_options(cls, v):
        return _check_meal_option(v)


class Room(BaseModel):
    id: UUID4
    company_id: UUID4
    name: str
    price: float
    capacity: int
    amenities: List[str] = []
    meal_options: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
