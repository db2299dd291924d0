# backend/app/db/repositories/activation_key_repository.py
from typing import Optional, List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.activation_key import ActivationKey
from app.db.repositories.base import BaseRepository


class ActivationKeyRepository(BaseRepository[ActivationKey]):
    """Repository for ActivationKey operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(ActivationKey, session)

    async def get_by_key(self, key: str) -> Optional[ActivationKey]:
        result = await self.session.execute(
            select(ActivationKey).where(ActivationKey.key == key)
        )
        return result.unique().scalar_one_or_none()

    async def list_newest_first(self) -> List[ActivationKey]:
        result = await self.session.execute(
            select(ActivationKey).order_by(ActivationKey.created_at.desc())
        )
        return list(result.unique().scalars().all())

    async def key_exists(self, key: str) -> bool:
        return await self.get_by_key(key) is not None
