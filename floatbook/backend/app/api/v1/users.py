# backend/app/api/v1/users.py
from fastapi import APIRouter, Depends

from app.db.models.user import User
from app.api.dependencies import get_current_active_user
from app.schemas.user import User as UserSchema

router = APIRouter()


@router.get("/me", response_model=UserSchema)
async def get_current_user_info(
    current_user: User = Depends(get_current_active_user)
):
    """Get current user information"""
    return current_user
