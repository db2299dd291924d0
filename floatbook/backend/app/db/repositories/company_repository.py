# backend/app/db/repositories/company_repository.py
from typing import Optional, List, Dict, Any
from sqlalchemy import select, func, delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.company import Company
from app.db.models.company_user import CompanyUser
from app.db.models.booking import Booking
from app.db.models.room import Room
from app.db.models.subscription import Subscription
from app.db.models.payment_intent import PaymentIntent
from app.db.models.activation_key import ActivationKey
from app.db.repositories.base import BaseRepository


class CompanyRepository(BaseRepository[Company]):
    """Repository for Company and membership operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(Company, session)

    async def get_by_id(self, company_id: Any) -> Optional[Company]:
        """Get company by ID"""
        result = await self.session.execute(
            select(Company).where(Company.id == company_id)
        )
        return result.scalar_one_or_none()

    async def get_membership(self, user_id: Any) -> Optional[CompanyUser]:
        """The single company membership of a user, if any"""
        result = await self.session.execute(
            select(CompanyUser)
            .where(CompanyUser.user_id == user_id)
            .order_by(CompanyUser.created_at)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def add_member(self, company_id: Any, user_id: Any, user_email: str, role: str) -> CompanyUser:
        """Attach a user to a company"""
        membership = CompanyUser(
            company_id=company_id,
            user_id=user_id,
            user_email=user_email,
            role=role,
        )
        self.session.add(membership)
        await self.session.commit()
        await self.session.refresh(membership)
        return membership

    async def list_members(self, company_id: Any) -> List[CompanyUser]:
        result = await self.session.execute(
            select(CompanyUser)
            .where(CompanyUser.company_id == company_id)
            .order_by(CompanyUser.created_at)
        )
        return list(result.scalars().all())

    async def count_members(self, company_id: Any) -> int:
        """Count users in company"""
        result = await self.session.execute(
            select(func.count(CompanyUser.id)).where(CompanyUser.company_id == company_id)
        )
        return result.scalar() or 0

    async def set_plan_name(self, company_id: Any, plan_name: str) -> None:
        """Update the denormalized plan name (caller commits)"""
        await self.session.execute(
            update(Company).where(Company.id == company_id).values(plan_name=plan_name)
        )

    async def list_with_stats(self) -> List[Dict[str, Any]]:
        """All companies, newest first, with member/booking counts and revenue"""
        members = (
            select(CompanyUser.company_id, func.count(CompanyUser.id).label("user_count"))
            .group_by(CompanyUser.company_id)
            .subquery()
        )
        bookings = (
            select(
                Booking.company_id,
                func.count(Booking.id).label("booking_count"),
                func.coalesce(func.sum(Booking.total_amount), 0).label("total_revenue"),
            )
            .group_by(Booking.company_id)
            .subquery()
        )
        result = await self.session.execute(
            select(
                Company,
                func.coalesce(members.c.user_count, 0),
                func.coalesce(bookings.c.booking_count, 0),
                func.coalesce(bookings.c.total_revenue, 0),
            )
            .outerjoin(members, members.c.company_id == Company.id)
            .outerjoin(bookings, bookings.c.company_id == Company.id)
            .order_by(Company.created_at.desc())
        )
        return [
            {
                "company": company,
                "user_count": int(user_count),
                "booking_count": int(booking_count),
                "total_revenue": float(total_revenue),
            }
            for company, user_count, booking_count, total_revenue in result.all()
        ]

    async def delete_with_data(self, company_id: Any) -> bool:
        """Delete a company and everything it owns"""
        await self.session.execute(delete(Booking).where(Booking.company_id == company_id))
        await self.session.execute(delete(Room).where(Room.company_id == company_id))
        await self.session.execute(delete(CompanyUser).where(CompanyUser.company_id == company_id))
        await self.session.execute(delete(Subscription).where(Subscription.company_id == company_id))
        await self.session.execute(delete(PaymentIntent).where(PaymentIntent.company_id == company_id))
        await self.session.execute(
            update(ActivationKey)
            .where(ActivationKey.used_by_company_id == company_id)
            .values(used_by_company_id=None)
        )
        result = await self.session.execute(delete(Company).where(Company.id == company_id))
        await self.session.commit()
        return result.rowcount > 0

    async def list_recent(self, limit: int = 5) -> List[Company]:
        result = await self.session.execute(
            select(Company).order_by(Company.created_at.desc()).limit(limit)
        )
        return list(result.scalars().all())
