# backend/app/api/v1/session.py
from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from app.api.dependencies import security
from app.core.constants import SystemRole
from app.core.security import decode_token
from app.core.session import resolve_session
from app.db.database import get_db
from app.db.repositories.company_repository import CompanyRepository
from app.db.repositories.user_repository import UserRepository
from app.schemas.session import SessionResponse

router = APIRouter()


async def _resolve(credentials: Optional[HTTPAuthorizationCredentials], db: AsyncSession) -> SessionResponse:
    user = None
    if credentials:
        try:
            payload = decode_token(credentials.credentials)
            if payload.get("type") == "access":
                user = await UserRepository(db).get(uuid.UUID(payload.get("sub") or ""))
        except (JWTError, ValueError):
            user = None

    if user is not None and not user.is_active:
        user = None

    membership = None
    # Superadmins skip the membership lookup entirely
    if user is not None and user.system_role != SystemRole.SUPERADMIN:
        membership = await CompanyRepository(db).get_membership(user.id)

    state = resolve_session(user, membership)
    return SessionResponse(
        user_id=state.user_id,
        email=state.email,
        system_role=state.system_role,
        company_id=state.company_id,
        company_role=state.company_role,
        route=state.route,
    )


@router.get("", response_model=SessionResponse)
async def get_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
):
    """Where the caller should land: login, admin, tenant or company_setup"""
    return await _resolve(credentials, db)


@router.post("/refresh", response_model=SessionResponse)
async def refresh_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
):
    """Re-run resolution, e.g. after company setup, a purchase or a key activation"""
    return await _resolve(credentials, db)
