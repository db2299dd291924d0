# backend/app/api/dependencies.py
from dataclasses import dataclass
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from app.core.constants import CompanyRole, SystemRole
from app.core.rbac import Permission, has_permission
from app.core.security import decode_token
from app.db.database import get_db
from app.db.models.company import Company
from app.db.models.company_user import CompanyUser
from app.db.models.user import User
from app.db.repositories.company_repository import CompanyRepository
from app.db.repositories.user_repository import UserRepository
from app.services.subscription_service import SubscriptionService

security = HTTPBearer(auto_error=False)


@dataclass
class CompanyContext:
    """Caller inside a tenant: the user, their membership and the company"""
    user: User
    membership: CompanyUser
    company: Company

    @property
    def company_id(self):
        return self.company.id


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Get current authenticated user"""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required"
        )

    try:
        payload = decode_token(credentials.credentials)
        user_id = uuid.UUID(payload.get("sub") or "")
    except (JWTError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials"
        )

    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type"
        )

    user = await UserRepository(db).get(user_id)

    if not user or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive"
        )

    return user


async def get_current_active_user(
    current_user: User = Depends(get_current_user),
) -> User:
    """Verify user is active"""
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user"
        )
    return current_user


async def get_company_context(
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db)
) -> CompanyContext:
    """Resolve the caller's company; superadmins and users without one are refused"""
    if current_user.system_role == SystemRole.SUPERADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Superadmins have no company"
        )

    company_repo = CompanyRepository(db)
    membership = await company_repo.get_membership(current_user.id)
    if not membership:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User not associated with any company"
        )

    company = await company_repo.get_by_id(membership.company_id)
    if not company:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Company not found"
        )

    return CompanyContext(user=current_user, membership=membership, company=company)


def require_permission(permission: Permission):
    """Dependency to check the caller's company role"""
    async def permission_checker(ctx: CompanyContext = Depends(get_company_context)) -> CompanyContext:
        if not has_permission(ctx.membership.role, permission):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires {CompanyRole.ADMIN.value} role"
            )
        return ctx

    return permission_checker


async def require_superadmin(
    current_user: User = Depends(get_current_active_user),
) -> User:
    if not has_permission(current_user.system_role, Permission.PLATFORM_MANAGE):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Superadmin access required"
        )
    return current_user


async def enforce_plan_limit(
    db: AsyncSession,
    company_id,
    limit_field: str,
    current_count: int,
    resource: str,
) -> None:
    """Raise 403 when creating one more resource would exceed the current plan"""
    reached, plan = await SubscriptionService(db).limit_reached(company_id, limit_field, current_count)

    if reached:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error": "plan_limit_reached",
                "message": f"Your {plan.name} plan allows {getattr(plan, limit_field)} {resource}",
                "current_plan": plan.name,
                "upgrade_url": "/settings?tab=plans",
            }
        )
