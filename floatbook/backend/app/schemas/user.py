# backend/app/schemas/user.py
from pydantic import BaseModel, EmailStr, UUID4
from typing import Optional
from datetime import datetime


class UserBase(BaseModel):
    email: EmailStr
    full_name: Optional[str] = None


class UserInDB(UserBase):
    id: UUID4
    system_role: str
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class User(UserInDB):
    pass


class UserWithCompany(User):
    """Superadmin user listing row"""
    company_name: Optional[str] = None


class UserStatusUpdate(BaseModel):
    is_active: bool
