"""
Pytest configuration and fixtures
Shared test setup for all test modules
"""

import os

# Settings are read at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_123")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_123")
os.environ.setdefault("BKASH_APP_KEY", "bkash-app-key")

import pytest
from typing import AsyncGenerator
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.db.base import Base
from app.db.database import get_db
from app.core.constants import CompanyRole, DEFAULT_PLANS, SystemRole
from app.core.security import create_access_token, get_password_hash
from app.db.models import Company, CompanyUser, Plan, Room, User, Booking

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "TestPassword123!"


def make_auth_headers(user: User) -> dict:
    access_token = create_access_token(
        data={"sub": str(user.id), "system_role": user.system_role}
    )
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh in-memory database for each test"""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()

    await test_engine.dispose()


@pytest.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Async test client with database override"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


async def create_user(db_session: AsyncSession, email: str, system_role: str = SystemRole.USER.value) -> User:
    user = User(
        email=email,
        full_name="Test User",
        hashed_password=get_password_hash(TEST_PASSWORD),
        system_role=system_role,
        is_active=True,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


async def add_membership(db_session: AsyncSession, company: Company, user: User, role: str) -> CompanyUser:
    membership = CompanyUser(
        company_id=company.id,
        user_id=user.id,
        user_email=user.email,
        role=role,
    )
    db_session.add(membership)
    await db_session.commit()
    return membership


@pytest.fixture
async def plans(db_session: AsyncSession) -> dict:
    """Default Free/Basic/Pro catalogue"""
    created = {}
    for name, limits in DEFAULT_PLANS.items():
        plan = Plan(name=name, stripe_price_id=f"price_{name.lower()}", **limits)
        db_session.add(plan)
        created[name] = plan
    await db_session.commit()
    return created


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Regular user without a company"""
    return await create_user(db_session, "owner@example.com")


@pytest.fixture
async def test_company(db_session: AsyncSession, test_user: User) -> Company:
    """Company with test_user as admin"""
    company = Company(name="Seaside Inn", currency="USD")
    db_session.add(company)
    await db_session.commit()
    await db_session.refresh(company)

    await add_membership(db_session, company, test_user, CompanyRole.ADMIN.value)
    return company


@pytest.fixture
def auth_headers(test_user: User, test_company: Company) -> dict:
    """Headers for the admin of test_company"""
    return make_auth_headers(test_user)


@pytest.fixture
async def member_headers(db_session: AsyncSession, test_company: Company) -> dict:
    """Headers for a plain member of test_company"""
    member = await create_user(db_session, "member@example.com")
    await add_membership(db_session, test_company, member, CompanyRole.MEMBER.value)
    return make_auth_headers(member)


@pytest.fixture
async def superadmin(db_session: AsyncSession) -> User:
    return await create_user(db_session, "root@example.com", SystemRole.SUPERADMIN.value)


@pytest.fixture
def superadmin_headers(superadmin: User) -> dict:
    return make_auth_headers(superadmin)


@pytest.fixture
async def test_room(db_session: AsyncSession, test_company: Company) -> Room:
    room = Room(
        company_id=test_company.id,
        name="Ocean View",
        price=100.0,
        capacity=2,
        amenities=["WiFi", "AC"],
        meal_options="Breakfast only",
    )
    db_session.add(room)
    await db_session.commit()
    await db_session.refresh(room)
    return room


async def create_booking(db_session: AsyncSession, company: Company, room: Room, **overrides) -> Booking:
    data = {
        "company_id": company.id,
        "room_id": room.id,
        "check_in_date": date.today(),
        "check_out_date": date.today(),
        "customer_name": "Alice Guest",
        "customer_email": "alice@example.com",
        "total_amount": 100.0,
        "discount_type": "fixed",
        "discount_value": 0.0,
        "advance_paid": 0.0,
        "is_paid": False,
    }
    data.update(overrides)
    booking = Booking(**data)
    db_session.add(booking)
    await db_session.commit()
    await db_session.refresh(booking)
    return booking
