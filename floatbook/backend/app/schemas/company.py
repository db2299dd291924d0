# backend/app/schemas/company.py
from pydantic import BaseModel, EmailStr, UUID4, Field, field_validator
from typing import Optional
from datetime import datetime

from app.core.constants import CompanyRole, SUPPORTED_CURRENCIES


def _check_currency(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    code = value.upper()
    if code not in SUPPORTED_CURRENCIES:
        raise ValueError(f"Unsupported currency: {value}")
    return code


class CompanyCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    currency: str = "USD"

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v):
        return _check_currency(v)


class CompanyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    logo_url: Optional[str] = None
    address: Optional[str] = None
    currency: Optional[str] = None
    tax_enabled: Optional[bool] = None
    tax_rate: Optional[float] = Field(None, ge=0, le=100)

    @field_validator("name", "currency", "tax_enabled", "tax_rate")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v):
        return _check_currency(v)


class Company(BaseModel):
    id: UUID4
    name: str
    logo_url: Optional[str] = None
    address: Optional[str] = None
    currency: str
    tax_enabled: bool
    tax_rate: float
    plan_name: str
    created_at: datetime

    class Config:
        from_attributes = True


class CompanyWithStats(Company):
    """Superadmin company listing row"""
    user_count: int = 0
    booking_count: int = 0
    total_revenue: float = 0.0


class CompanyMember(BaseModel):
    id: UUID4
    user_id: UUID4
    user_email: Optional[str] = None
    role: str
    created_at: datetime

    class Config:
        from_attributes = True


class CompanyMemberAdd(BaseModel):
    email: EmailStr
    role: CompanyRole = CompanyRole.MEMBER
