# backend/app/db/repositories/payment_intent_repository.py
from typing import Optional, Any
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.payment_intent import PaymentIntent
from app.db.repositories.base import BaseRepository


class PaymentIntentRepository(BaseRepository[PaymentIntent]):
    """Repository for PaymentIntent operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(PaymentIntent, session)

    async def get_by_bkash_payment(self, payment_id: str, user_id: Any) -> Optional[PaymentIntent]:
        """Intent created by this user for the given bKash payment"""
        result = await self.session.execute(
            select(PaymentIntent)
            .where(PaymentIntent.bkash_payment_id == payment_id)
            .where(PaymentIntent.user_id == user_id)
        )
        return result.unique().scalars().first()
