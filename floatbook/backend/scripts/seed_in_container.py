import asyncio
import os

from app.core.constants import DEFAULT_PLANS, SystemRole
from app.core.security import get_password_hash
from app.db.database import async_session_local, init_db
from app.db.repositories.plan_repository import PlanRepository
from app.db.repositories.user_repository import UserRepository

SUPERADMIN_EMAIL = os.getenv("SUPERADMIN_EMAIL", "admin@floatbook.app")
SUPERADMIN_PASSWORD = os.getenv("SUPERADMIN_PASSWORD", "Admin123!")


async def seed_data():
    await init_db()

    async with async_session_local() as session:
        plan_repo = PlanRepository(session)
        user_repo = UserRepository(session)

        # Create the default plan catalogue
        for name, limits in DEFAULT_PLANS.items():
            existing_plan = await plan_repo.get_by_name(name)
            if existing_plan:
                print(f"Plan already exists: {existing_plan.name}")
                continue
            plan = await plan_repo.create({"name": name, **limits})
            print(f"Created plan: {plan.name}")

        # Create or get the superadmin
        existing_user = await user_repo.get_by_email(SUPERADMIN_EMAIL)
        if existing_user:
            user = existing_user
            print(f"User already exists: {user.email}")
        else:
            user = await user_repo.create({
                "email": SUPERADMIN_EMAIL,
                "hashed_password": get_password_hash(SUPERADMIN_PASSWORD),
                "full_name": "Platform Admin",
                "system_role": SystemRole.SUPERADMIN.value,
                "is_active": True,
            })
            print(f"Created user: {user.email}")
        print("\nSuperadmin credentials:")
        print(f"Email: {SUPERADMIN_EMAIL}")
        print(f"Password: {SUPERADMIN_PASSWORD}")

if __name__ == "__main__":
    asyncio.run(seed_data())
