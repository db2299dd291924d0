# backend/app/db/repositories/user_repository.py
from typing import Optional, List, Dict, Any
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.user import User
from app.db.models.company import Company
from app.db.models.company_user import CompanyUser
from app.db.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        result = await self.session.execute(
            select(User).where(User.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def list_with_companies(self) -> List[Dict[str, Any]]:
        """All users with the name of the company they belong to, if any"""
        result = await self.session.execute(
            select(User, Company.name)
            .outerjoin(CompanyUser, CompanyUser.user_id == User.id)
            .outerjoin(Company, Company.id == CompanyUser.company_id)
            .order_by(User.created_at.desc())
        )
        return [
            {"user": user, "company_name": company_name}
            for user, company_name in result.all()
        ]
