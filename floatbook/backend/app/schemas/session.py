# backend/app/schemas/session.py
from pydantic import BaseModel
from typing import Optional

from app.core.constants import SessionRoute


class SessionResponse(BaseModel):
    """Resolved session: who the caller is and which app to render"""
    user_id: Optional[str] = None
    email: Optional[str] = None
    system_role: str
    company_id: Optional[str] = None
    company_role: Optional[str] = None
    route: SessionRoute

    class Config:
        from_attributes = True
