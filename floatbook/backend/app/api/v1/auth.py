# backend/app/api/v1/auth.py
from fastapi import APIRouter, Depends, HTTPException, status
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession
import uuid
from datetime import datetime

from app.db.database import get_db
from app.db.models.user import User
from app.db.repositories.user_repository import UserRepository
from app.schemas.auth import (
    Token, LoginRequest, SignupRequest, RefreshTokenRequest
)
from app.core.constants import SystemRole
from app.core.logging import logger
from app.core.security import (
    verify_password, get_password_hash, create_access_token, create_refresh_token, decode_token
)

router = APIRouter()


def _issue_tokens(user: User) -> Token:
    access_token = create_access_token({
        "sub": str(user.id),
        "system_role": user.system_role,
    })

    refresh_token = create_refresh_token({
        "sub": str(user.id),
    })

    return Token(
        access_token=access_token,
        refresh_token=refresh_token,
    )


@router.post("/signup", response_model=Token)
async def signup(
    request: SignupRequest,
    db: AsyncSession = Depends(get_db)
):
    """Register a new user; the company is created afterwards in company setup"""
    user_repo = UserRepository(db)

    # Check if user exists
    existing_user = await user_repo.get_by_email(request.email)
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    user = await user_repo.create({
        "email": request.email.lower(),
        "hashed_password": get_password_hash(request.password),
        "full_name": request.full_name,
        "system_role": SystemRole.USER.value,
        "is_active": True,
    })

    logger.info("User signed up", extra={"user_id": str(user.id)})
    return _issue_tokens(user)


@router.post("/login", response_model=Token)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """Login user"""
    user_repo = UserRepository(db)

    user = await user_repo.get_by_email(request.email)

    if not user or not verify_password(request.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )

    # Update last login
    user = await user_repo.update(user.id, {"last_login": datetime.utcnow()})

    return _issue_tokens(user)


@router.post("/refresh", response_model=Token)
async def refresh_token(
    request: RefreshTokenRequest,
    db: AsyncSession = Depends(get_db)
):
    """Refresh access token"""
    try:
        payload = decode_token(request.refresh_token)
        user_id = uuid.UUID(payload.get("sub") or "")
    except (JWTError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials"
        )

    if payload.get("type") != "refresh":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type"
        )

    # Verify user still exists and is active
    user = await UserRepository(db).get(user_id)

    if not user or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive"
        )

    return _issue_tokens(user)


@router.post("/logout")
async def logout():
    """Logout user (client should discard tokens)"""
    return {"message": "Successfully logged out"}
