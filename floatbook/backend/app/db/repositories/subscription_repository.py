# backend/app/db/repositories/subscription_repository.py
from datetime import datetime
from typing import Optional, Any
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import SubscriptionStatus
from app.db.models.subscription import Subscription
from app.db.repositories.base import BaseRepository


class SubscriptionRepository(BaseRepository[Subscription]):
    """Repository for Subscription operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(Subscription, session)

    async def get_latest_active(self, company_id: Any) -> Optional[Subscription]:
        """Most recently created active subscription of a company"""
        result = await self.session.execute(
            select(Subscription)
            .where(Subscription.company_id == company_id)
            .where(Subscription.status == SubscriptionStatus.ACTIVE.value)
            .order_by(Subscription.created_at.desc())
            .limit(1)
        )
        return result.unique().scalar_one_or_none()

    async def get_by_stripe_id(self, stripe_subscription_id: str) -> Optional[Subscription]:
        result = await self.session.execute(
            select(Subscription).where(
                Subscription.stripe_subscription_id == stripe_subscription_id
            )
        )
        return result.unique().scalar_one_or_none()

    async def upsert_stripe(
        self,
        stripe_subscription_id: str,
        company_id: Any,
        plan_id: Any,
        status: str,
        current_period_end: Optional[datetime],
    ) -> Subscription:
        """Insert or update the row keyed by the Stripe subscription id (caller commits)"""
        subscription = await self.get_by_stripe_id(stripe_subscription_id)
        if subscription is None:
            subscription = Subscription(stripe_subscription_id=stripe_subscription_id)
            self.session.add(subscription)

        subscription.company_id = company_id
        subscription.plan_id = plan_id
        subscription.status = status
        subscription.current_period_end = current_period_end
        return subscription
