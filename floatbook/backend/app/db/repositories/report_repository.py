# backend/app/db/repositories/report_repository.py
from datetime import date
from typing import Optional, List, Dict, Any, Sequence, Tuple
from sqlalchemy import select, func, case, distinct
from sqlalchemy.ext.asyncio import AsyncSession

from app.booking.financials import financials_for
from app.core.constants import PaymentStatusFilter, DiscountStatusFilter, DiscountType
from app.db.models.booking import Booking
from app.db.models.company import Company
from app.db.models.room import Room


class ReportRepository:
    """
    Report aggregations over a company's bookings.

    Every query filters on check_in_date in [start, end] and the optional
    room subset; payment and discount filters apply where noted.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _customer_key():
        # Customers are identified by email, falling back to name
        return func.lower(func.coalesce(Booking.customer_email, Booking.customer_name))

    @staticmethod
    def _apply_filters(
        stmt,
        company_id: Any,
        start: date,
        end: date,
        room_ids: Optional[Sequence[Any]] = None,
        payment_status: str = PaymentStatusFilter.ALL,
        discount_status: str = DiscountStatusFilter.ALL,
    ):
        stmt = (
            stmt.where(Booking.company_id == company_id)
            .where(Booking.check_in_date >= start)
            .where(Booking.check_in_date <= end)
        )
        if room_ids:
            stmt = stmt.where(Booking.room_id.in_(list(room_ids)))

        if payment_status == PaymentStatusFilter.PAID:
            stmt = stmt.where(Booking.is_paid.is_(True))
        elif payment_status == PaymentStatusFilter.UNPAID:
            stmt = stmt.where(Booking.is_paid.is_(False))

        if discount_status == DiscountStatusFilter.DISCOUNTED:
            stmt = stmt.where(Booking.discount_value > 0)
        elif discount_status == DiscountStatusFilter.NOT_DISCOUNTED:
            stmt = stmt.where(Booking.discount_value <= 0)
        return stmt

    async def daily_stats(
        self,
        company_id: Any,
        start: date,
        end: date,
        room_ids: Optional[Sequence[Any]] = None,
        payment_status: str = PaymentStatusFilter.ALL,
        discount_status: str = DiscountStatusFilter.ALL,
    ) -> List[Dict[str, Any]]:
        """Bookings, revenue and first-time customers per check-in day"""
        customer_key = self._customer_key()
        first_seen = (
            select(
                customer_key.label("customer_key"),
                func.min(Booking.check_in_date).label("first_date"),
            )
            .where(Booking.company_id == company_id)
            .group_by(customer_key)
            .subquery()
        )

        stmt = (
            select(
                Booking.check_in_date,
                func.count(Booking.id),
                func.coalesce(func.sum(Booking.total_amount), 0),
                func.count(distinct(case(
                    (Booking.check_in_date == first_seen.c.first_date, customer_key),
                    else_=None,
                ))),
            )
            .select_from(Booking)
            .outerjoin(first_seen, first_seen.c.customer_key == customer_key)
        )
        stmt = self._apply_filters(
            stmt, company_id, start, end, room_ids, payment_status, discount_status
        )
        result = await self.session.execute(
            stmt.group_by(Booking.check_in_date).order_by(Booking.check_in_date)
        )
        return [
            {
                "date": day,
                "total_bookings": int(bookings),
                "total_revenue": float(revenue),
                "new_customers": int(new_customers),
            }
            for day, bookings, revenue, new_customers in result.all()
        ]

    async def room_stats(
        self,
        company_id: Any,
        start: date,
        end: date,
        room_ids: Optional[Sequence[Any]] = None,
        payment_status: str = PaymentStatusFilter.ALL,
        discount_status: str = DiscountStatusFilter.ALL,
    ) -> List[Dict[str, Any]]:
        """Bookings and revenue per room, highest revenue first"""
        revenue = func.coalesce(func.sum(Booking.total_amount), 0)
        stmt = (
            select(Room.id, Room.name, func.count(Booking.id), revenue)
            .select_from(Booking)
            .join(Room, Room.id == Booking.room_id)
        )
        stmt = self._apply_filters(
            stmt, company_id, start, end, room_ids, payment_status, discount_status
        )
        result = await self.session.execute(
            stmt.group_by(Room.id, Room.name).order_by(revenue.desc(), Room.name)
        )
        return [
            {
                "room_id": room_id,
                "room_name": name,
                "total_bookings": int(bookings),
                "total_revenue": float(total),
            }
            for room_id, name, bookings, total in result.all()
        ]

    async def _filtered_bookings(self, company_id: Any, start: date, end: date, **filters) -> List[Booking]:
        stmt = self._apply_filters(select(Booking), company_id, start, end, **filters)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def financial_summary(
        self,
        company: Company,
        start: date,
        end: date,
        room_ids: Optional[Sequence[Any]] = None,
        payment_status: str = PaymentStatusFilter.ALL,
        discount_status: str = DiscountStatusFilter.ALL,
    ) -> Dict[str, float]:
        """Tax-aware paid/unpaid revenue, advances and dues"""
        bookings = await self._filtered_bookings(
            company.id, start, end,
            room_ids=room_ids,
            payment_status=payment_status,
            discount_status=discount_status,
        )

        summary = {"paid_revenue": 0.0, "unpaid_revenue": 0.0, "total_advance": 0.0, "total_due": 0.0}
        for booking in bookings:
            financials = financials_for(booking, company)
            if booking.is_paid:
                summary["paid_revenue"] += financials.final_total
            else:
                summary["unpaid_revenue"] += financials.final_total
            summary["total_advance"] += float(booking.advance_paid or 0)
            summary["total_due"] += financials.due_amount
        return summary

    async def discount_report(
        self,
        company_id: Any,
        start: date,
        end: date,
        room_ids: Optional[Sequence[Any]] = None,
        payment_status: str = PaymentStatusFilter.ALL,
    ) -> List[Dict[str, Any]]:
        """Discounted bookings grouped by discount type"""
        discount_amount = case(
            (
                Booking.discount_type == DiscountType.PERCENTAGE.value,
                Booking.total_amount * Booking.discount_value / 100,
            ),
            else_=Booking.discount_value,
        )
        stmt = select(
            Booking.discount_type,
            func.count(Booking.id),
            func.coalesce(func.sum(discount_amount), 0),
        ).where(Booking.discount_value > 0)
        stmt = self._apply_filters(stmt, company_id, start, end, room_ids, payment_status)
        result = await self.session.execute(
            stmt.group_by(Booking.discount_type).order_by(Booking.discount_type)
        )
        return [
            {
                "discount_type": discount_type,
                "booking_count": int(count),
                "total_discounted": float(total),
            }
            for discount_type, count, total in result.all()
        ]

    async def occupancy_inputs(
        self,
        company_id: Any,
        start: date,
        end: date,
        room_ids: Optional[Sequence[Any]] = None,
    ) -> Tuple[List[Tuple[date, date]], int]:
        """Stays overlapping the range and the number of rooms in scope"""
        stays_stmt = (
            select(Booking.check_in_date, Booking.check_out_date)
            .where(Booking.company_id == company_id)
            .where(Booking.check_in_date <= end)
            .where(Booking.check_out_date >= start)
        )
        rooms_stmt = select(func.count(Room.id)).where(Room.company_id == company_id)
        if room_ids:
            stays_stmt = stays_stmt.where(Booking.room_id.in_(list(room_ids)))
            rooms_stmt = rooms_stmt.where(Room.id.in_(list(room_ids)))

        stays = [(ci, co) for ci, co in (await self.session.execute(stays_stmt)).all()]
        room_count = (await self.session.execute(rooms_stmt)).scalar() or 0
        return stays, room_count
