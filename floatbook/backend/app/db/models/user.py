# backend/app/db/models/user.py
from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from sqlalchemy.orm import relationship
import uuid
from app.db.base import BaseModel


class User(BaseModel):
    """Login identity; company membership lives in company_users"""
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=True)

    # Profile
    full_name = Column(String(255), nullable=True)

    # user | superadmin
    system_role = Column(String(50), default="user", nullable=False)

    # Status
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime, nullable=True)

    # Relationships
    memberships = relationship("CompanyUser", back_populates="user", cascade="all, delete-orphan")
