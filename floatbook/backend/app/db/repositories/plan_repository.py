# backend/app/db/repositories/plan_repository.py
from typing import Optional, List
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.plan import Plan
from app.db.models.subscription import Subscription
from app.db.models.activation_key import ActivationKey
from app.db.models.payment_intent import PaymentIntent
from app.db.repositories.base import BaseRepository


class PlanRepository(BaseRepository[Plan]):
    """Repository for Plan operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(Plan, session)

    async def list_by_price(self) -> List[Plan]:
        result = await self.session.execute(select(Plan).order_by(Plan.price, Plan.name))
        return list(result.scalars().all())

    async def get_by_name(self, name: str) -> Optional[Plan]:
        result = await self.session.execute(select(Plan).where(Plan.name == name))
        return result.scalar_one_or_none()

    async def get_by_stripe_price(self, price_id: str) -> Optional[Plan]:
        """Map a Stripe price back to the plan it sells"""
        result = await self.session.execute(
            select(Plan).where(Plan.stripe_price_id == price_id)
        )
        return result.scalars().first()

    async def in_use(self, plan_id) -> bool:
        """Whether subscriptions, keys or payment intents reference the plan"""
        for model in (Subscription, ActivationKey, PaymentIntent):
            result = await self.session.execute(
                select(func.count(model.id)).where(model.plan_id == plan_id)
            )
            if result.scalar():
                return True
        return False
