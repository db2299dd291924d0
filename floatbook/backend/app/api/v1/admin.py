# backend/app/api/v1/admin.py
from datetime import datetime, timedelta
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from uuid import UUID

from app.api.dependencies import require_superadmin
from app.core.logging import logger
from app.db.database import get_db
from app.db.models.user import User
from app.db.repositories.activation_key_repository import ActivationKeyRepository
from app.db.repositories.booking_repository import BookingRepository
from app.db.repositories.company_repository import CompanyRepository
from app.db.repositories.plan_repository import PlanRepository
from app.db.repositories.user_repository import UserRepository
from app.schemas.admin import ActivationKey, ActivationKeyGenerate, AdminStats
from app.schemas.company import CompanyWithStats
from app.schemas.plan import Plan, PlanCreate, PlanUpdate
from app.schemas.user import UserStatusUpdate, UserWithCompany
from app.services.activation_key_service import create_keys
from app.services.exceptions import BillingError

router = APIRouter()


def _key_to_schema(key) -> ActivationKey:
    return ActivationKey.model_validate(key).model_copy(
        update={"plan_name": key.plan.name if key.plan else None}
    )


@router.get("/stats", response_model=AdminStats)
async def get_stats(
    current_user: User = Depends(require_superadmin),
    db: AsyncSession = Depends(get_db)
):
    """Platform totals for the superadmin dashboard"""
    company_repo = CompanyRepository(db)
    user_repo = UserRepository(db)
    booking_repo = BookingRepository(db)
    now = datetime.utcnow()

    return AdminStats(
        total_companies=await company_repo.count(),
        total_users=await user_repo.count(),
        total_bookings=await booking_repo.count(),
        total_revenue=await booking_repo.total_revenue(),
        bookings_last_30_days=await booking_repo.count_created_since(now - timedelta(days=30)),
        users_last_7_days=await user_repo.count_created_since(now - timedelta(days=7)),
        recent_companies=await company_repo.list_recent(5),
    )


# Companies

@router.get("/companies", response_model=List[CompanyWithStats])
async def list_companies(
    current_user: User = Depends(require_superadmin),
    db: AsyncSession = Depends(get_db)
):
    rows = await CompanyRepository(db).list_with_stats()
    return [
        CompanyWithStats.model_validate(row["company"]).model_copy(update={
            "user_count": row["user_count"],
            "booking_count": row["booking_count"],
            "total_revenue": row["total_revenue"],
        })
        for row in rows
    ]


@router.delete("/companies/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_company(
    company_id: UUID,
    current_user: User = Depends(require_superadmin),
    db: AsyncSession = Depends(get_db)
):
    """Delete a company with its rooms, bookings, members and billing rows"""
    if not await CompanyRepository(db).delete_with_data(company_id):
        raise HTTPException(status_code=404, detail="Company not found")

    logger.info("Company deleted", extra={"company_id": str(company_id), "user_id": str(current_user.id)})


# Users

@router.get("/users", response_model=List[UserWithCompany])
async def list_users(
    current_user: User = Depends(require_superadmin),
    db: AsyncSession = Depends(get_db)
):
    rows = await UserRepository(db).list_with_companies()
    return [
        UserWithCompany.model_validate(row["user"]).model_copy(update={"company_name": row["company_name"]})
        for row in rows
    ]


@router.patch("/users/{user_id}", response_model=UserWithCompany)
async def set_user_status(
    user_id: UUID,
    request: UserStatusUpdate,
    current_user: User = Depends(require_superadmin),
    db: AsyncSession = Depends(get_db)
):
    """Activate or deactivate a user"""
    if user_id == current_user.id:
        raise HTTPException(status_code=400, detail="Cannot change your own status")

    user_repo = UserRepository(db)
    if not await user_repo.get(user_id):
        raise HTTPException(status_code=404, detail="User not found")

    return await user_repo.update(user_id, {"is_active": request.is_active})


# Plans

@router.get("/plans", response_model=List[Plan])
async def list_plans(
    current_user: User = Depends(require_superadmin),
    db: AsyncSession = Depends(get_db)
):
    return await PlanRepository(db).list_by_price()


@router.post("/plans", response_model=Plan, status_code=status.HTTP_201_CREATED)
async def create_plan(
    request: PlanCreate,
    current_user: User = Depends(require_superadmin),
    db: AsyncSession = Depends(get_db)
):
    plan_repo = PlanRepository(db)
    if await plan_repo.get_by_name(request.name):
        raise HTTPException(status_code=400, detail="A plan with this name already exists")
    return await plan_repo.create(request.model_dump())


@router.put("/plans/{plan_id}", response_model=Plan)
async def update_plan(
    plan_id: UUID,
    request: PlanUpdate,
    current_user: User = Depends(require_superadmin),
    db: AsyncSession = Depends(get_db)
):
    plan_repo = PlanRepository(db)
    if not await plan_repo.get(plan_id):
        raise HTTPException(status_code=404, detail="Plan not found")

    try:
        return await plan_repo.update(plan_id, request.model_dump(exclude_unset=True))
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=400, detail="A plan with this name already exists")


@router.delete("/plans/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plan(
    plan_id: UUID,
    current_user: User = Depends(require_superadmin),
    db: AsyncSession = Depends(get_db)
):
    plan_repo = PlanRepository(db)
    if not await plan_repo.get(plan_id):
        raise HTTPException(status_code=404, detail="Plan not found")
    if await plan_repo.in_use(plan_id):
        raise HTTPException(status_code=400, detail="Plan is referenced by subscriptions or keys")

    await plan_repo.delete(plan_id)


# Activation keys

@router.get("/keys", response_model=List[ActivationKey])
async def list_keys(
    current_user: User = Depends(require_superadmin),
    db: AsyncSession = Depends(get_db)
):
    keys = await ActivationKeyRepository(db).list_newest_first()
    return [_key_to_schema(k) for k in keys]


@router.post("/keys", response_model=List[ActivationKey], status_code=status.HTTP_201_CREATED)
async def generate_keys(
    request: ActivationKeyGenerate,
    current_user: User = Depends(require_superadmin),
    db: AsyncSession = Depends(get_db)
):
    """Generate one-time keys for a paid plan"""
    plan = await PlanRepository(db).get(request.plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Plan not found")

    try:
        keys = await create_keys(db, plan, request.count)
    except BillingError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return [
        ActivationKey.model_validate(k).model_copy(update={"plan_name": plan.name})
        for k in keys
    ]
