# backend/app/db/repositories/booking_repository.py
from datetime import date
from typing import Optional, List, Any
from sqlalchemy import select, or_, func, update
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import PaymentStatusFilter
from app.db.models.booking import Booking
from app.db.models.room import Room
from app.db.repositories.base import BaseRepository


class BookingRepository(BaseRepository[Booking]):
    """Repository for Booking operations, always scoped by company"""

    def __init__(self, session: AsyncSession):
        super().__init__(Booking, session)

    def _with_room(self):
        return select(Booking).options(selectinload(Booking.room))

    async def list_for_company(
        self,
        company_id: Any,
        query: Optional[str] = None,
        payment_status: str = PaymentStatusFilter.ALL,
    ) -> List[Booking]:
        """Bookings newest check-in first, filtered by text and payment state"""
        stmt = (
            self._with_room()
            .join(Room, Room.id == Booking.room_id)
            .where(Booking.company_id == company_id)
        )

        if query:
            pattern = f"%{query.lower()}%"
            stmt = stmt.where(or_(
                func.lower(Booking.customer_name).like(pattern),
                func.lower(Room.name).like(pattern),
                func.lower(func.coalesce(Booking.referred_by, "")).like(pattern),
            ))

        if payment_status == PaymentStatusFilter.PAID:
            stmt = stmt.where(Booking.is_paid.is_(True))
        elif payment_status == PaymentStatusFilter.UNPAID:
            stmt = stmt.where(Booking.is_paid.is_(False))

        result = await self.session.execute(
            stmt.order_by(Booking.check_in_date.desc(), Booking.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_checking_in_between(self, company_id: Any, start: date, end: date) -> List[Booking]:
        """Bookings with check-in in [start, end]"""
        result = await self.session.execute(
            self._with_room()
            .where(Booking.company_id == company_id)
            .where(Booking.check_in_date >= start)
            .where(Booking.check_in_date <= end)
            .order_by(Booking.check_in_date)
        )
        return list(result.scalars().all())

    async def get_for_company(self, booking_id: Any, company_id: Any, refresh: bool = False) -> Optional[Booking]:
        stmt = (
            self._with_room()
            .where(Booking.id == booking_id)
            .where(Booking.company_id == company_id)
        )
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def count_for_company(self, company_id: Any) -> int:
        return await self.count({"company_id": company_id})

    async def create_booking(self, obj_in: dict) -> Booking:
        booking = await self.create(obj_in)
        return await self.get_for_company(booking.id, booking.company_id, refresh=True)

    async def update_for_company(self, booking_id: Any, company_id: Any, obj_in: dict) -> Optional[Booking]:
        await self.session.execute(
            update(Booking)
            .where(Booking.id == booking_id)
            .where(Booking.company_id == company_id)
            .values(**obj_in)
        )
        await self.session.commit()
        return await self.get_for_company(booking_id, company_id, refresh=True)

    async def toggle_paid(self, booking_id: Any, company_id: Any) -> Optional[Booking]:
        """Flip the stored paid flag"""
        await self.session.execute(
            update(Booking)
            .where(Booking.id == booking_id)
            .where(Booking.company_id == company_id)
            .values(is_paid=~Booking.is_paid)
        )
        await self.session.commit()
        return await self.get_for_company(booking_id, company_id, refresh=True)

    async def delete_for_company(self, booking_id: Any, company_id: Any) -> bool:
        booking = await self.get_for_company(booking_id, company_id)
        if not booking:
            return False
        return await self.delete(booking_id)

    async def total_revenue(self) -> float:
        """Sum of total_amount over every booking, across tenants"""
        result = await self.session.execute(
            select(func.coalesce(func.sum(Booking.total_amount), 0))
        )
        return float(result.scalar() or 0)
