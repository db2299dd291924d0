# backend/app/db/models/company_user.py
from sqlalchemy import Column, String, ForeignKey, Uuid
from sqlalchemy.orm import relationship
import uuid
from app.db.base import BaseModel


class CompanyUser(BaseModel):
    """Membership of a user in a company with a company role (admin, member)"""
    __tablename__ = "company_users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    company_id = Column(Uuid(as_uuid=True), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    user_email = Column(String(255), nullable=True)
    role = Column(String(50), default="member", nullable=False)

    # Relationships
    company = relationship("Company", back_populates="members")
    user = relationship("User", back_populates="memberships")
