# backend/app/api/v1/companies.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.api.dependencies import (
    CompanyContext, get_company_context, get_current_active_user,
    require_permission, enforce_plan_limit,
)
from app.core.config import settings
from app.core.constants import CompanyRole, SystemRole
from app.core.logging import logger
from app.core.rbac import Permission
from app.db.database import get_db
from app.db.models.user import User
from app.db.repositories.company_repository import CompanyRepository
from app.db.repositories.user_repository import UserRepository
from app.schemas.company import (
    Company, CompanyCreate, CompanyUpdate, CompanyMember, CompanyMemberAdd,
)

router = APIRouter()


@router.post("", response_model=Company, status_code=status.HTTP_201_CREATED)
async def create_company(
    request: CompanyCreate,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db)
):
    """Company setup: create the company and make the caller its admin"""
    if current_user.system_role == SystemRole.SUPERADMIN:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Superadmins cannot create a company"
        )

    company_repo = CompanyRepository(db)
    if await company_repo.get_membership(current_user.id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already belongs to a company"
        )

    company = await company_repo.create({
        "name": request.name,
        "currency": request.currency,
        "plan_name": settings.DEFAULT_PLAN_NAME,
    })
    await company_repo.add_member(
        company_id=company.id,
        user_id=current_user.id,
        user_email=current_user.email,
        role=CompanyRole.ADMIN.value,
    )

    logger.info(
        "Company created",
        extra={"company_id": str(company.id), "user_id": str(current_user.id)},
    )
    return company


@router.get("/me", response_model=Company)
async def get_my_company(ctx: CompanyContext = Depends(get_company_context)):
    return ctx.company


@router.patch("/me", response_model=Company)
async def update_my_company(
    request: CompanyUpdate,
    ctx: CompanyContext = Depends(require_permission(Permission.COMPANY_MANAGE)),
    db: AsyncSession = Depends(get_db)
):
    """Update branding, currency and tax settings"""
    update_data = request.model_dump(exclude_unset=True)
    return await CompanyRepository(db).update(ctx.company_id, update_data)


@router.get("/me/users", response_model=List[CompanyMember])
async def list_company_users(
    ctx: CompanyContext = Depends(get_company_context),
    db: AsyncSession = Depends(get_db)
):
    return await CompanyRepository(db).list_members(ctx.company_id)


@router.post("/me/users", response_model=CompanyMember, status_code=status.HTTP_201_CREATED)
async def add_company_user(
    request: CompanyMemberAdd,
    ctx: CompanyContext = Depends(require_permission(Permission.TEAM_MANAGE)),
    db: AsyncSession = Depends(get_db)
):
    """Add an existing, company-less user to the team"""
    company_repo = CompanyRepository(db)

    await enforce_plan_limit(
        db, ctx.company_id, "user_limit",
        await company_repo.count_members(ctx.company_id), "users",
    )

    user = await UserRepository(db).get_by_email(request.email)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No user with this email"
        )

    if user.system_role == SystemRole.SUPERADMIN:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Superadmins cannot join a company"
        )

    if await company_repo.get_membership(user.id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already belongs to a company"
        )

    return await company_repo.add_member(
        company_id=ctx.company_id,
        user_id=user.id,
        user_email=user.email,
        role=request.role.value,
    )
