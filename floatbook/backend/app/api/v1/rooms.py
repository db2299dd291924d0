# backend/app/api/v1/rooms.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from uuid import UUID

from app.api.dependencies import CompanyContext, require_permission, enforce_plan_limit
from app.core.rbac import Permission
from app.db.database import get_db
from app.db.repositories.room_repository import RoomRepository
from app.schemas.room import Room, RoomCreate, RoomUpdate

router = APIRouter()


@router.get("", response_model=List[Room])
async def list_rooms(
    ctx: CompanyContext = Depends(require_permission(Permission.ROOM_VIEW)),
    db: AsyncSession = Depends(get_db)
):
    """List rooms, oldest first"""
    return await RoomRepository(db).list_for_company(ctx.company_id)


@router.post("", response_model=Room, status_code=status.HTTP_201_CREATED)
async def create_room(
    request: RoomCreate,
    ctx: CompanyContext = Depends(require_permission(Permission.ROOM_MANAGE)),
    db: AsyncSession = Depends(get_db)
):
    room_repo = RoomRepository(db)

    await enforce_plan_limit(
        db, ctx.company_id, "room_limit",
        await room_repo.count_for_company(ctx.company_id), "rooms",
    )

    return await room_repo.create({
        **request.model_dump(),
        "company_id": ctx.company_id,
    })


@router.get("/{room_id}", response_model=Room)
async def get_room(
    room_id: UUID,
    ctx: CompanyContext = Depends(require_permission(Permission.ROOM_VIEW)),
    db: AsyncSession = Depends(get_db)
):
    room = await RoomRepository(db).get_for_company(room_id, ctx.company_id)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    return room


@router.put("/{room_id}", response_model=Room)
async def update_room(
    room_id: UUID,
    request: RoomUpdate,
    ctx: CompanyContext = Depends(require_permission(Permission.ROOM_MANAGE)),
    db: AsyncSession = Depends(get_db)
):
    room_repo = RoomRepository(db)
    if not await room_repo.get_for_company(room_id, ctx.company_id):
        raise HTTPException(status_code=404, detail="Room not found")

    return await room_repo.update(room_id, request.model_dump(exclude_unset=True))


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_room(
    room_id: UUID,
    ctx: CompanyContext = Depends(require_permission(Permission.ROOM_MANAGE)),
    db: AsyncSession = Depends(get_db)
):
    """Delete a room and all of its bookings"""
    deleted = await RoomRepository(db).delete_for_company(room_id, ctx.company_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Room not found")
