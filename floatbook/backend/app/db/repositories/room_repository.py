# backend/app/db/repositories/room_repository.py
from typing import Optional, List, Any
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.room import Room
from app.db.models.booking import Booking
from app.db.repositories.base import BaseRepository


class RoomRepository(BaseRepository[Room]):
    """Repository for Room operations, always scoped by company"""

    def __init__(self, session: AsyncSession):
        super().__init__(Room, session)

    async def list_for_company(self, company_id: Any, order_by_name: bool = False) -> List[Room]:
        order = Room.name if order_by_name else Room.created_at
        result = await self.session.execute(
            select(Room).where(Room.company_id == company_id).order_by(order)
        )
        return list(result.scalars().all())

    async def get_for_company(self, room_id: Any, company_id: Any) -> Optional[Room]:
        result = await self.session.execute(
            select(Room).where(Room.id == room_id).where(Room.company_id == company_id)
        )
        return result.scalar_one_or_none()

    async def count_for_company(self, company_id: Any) -> int:
        return await self.count({"company_id": company_id})

    async def delete_for_company(self, room_id: Any, company_id: Any) -> bool:
        """Delete a room together with its bookings"""
        room = await self.get_for_company(room_id, company_id)
        if not room:
            return False
        await self.session.execute(delete(Booking).where(Booking.room_id == room_id))
        await self.session.execute(delete(Room).where(Room.id == room_id))
        await self.session.commit()
        return True
