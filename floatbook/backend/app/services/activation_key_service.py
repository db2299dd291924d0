# backend/app/services/activation_key_service.py
import secrets
import string
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.logging import logger
from app.db.models.activation_key import ActivationKey
from app.db.models.plan import Plan
from app.db.repositories.activation_key_repository import ActivationKeyRepository
from app.services.exceptions import BillingError

KEY_ALPHABET = string.ascii_uppercase + string.digits
KEY_RANDOM_LENGTH = 8


def generate_key(plan_name: str) -> str:
    """PREFIX-XXXXXXXX where PREFIX is the first three letters of the plan name"""
    prefix = (plan_name or "").upper()[:3] or "KEY"
    random_part = "".join(secrets.choice(KEY_ALPHABET) for _ in range(KEY_RANDOM_LENGTH))
    return f"{prefix}-{random_part}"


async def create_keys(db: AsyncSession, plan: Plan, count: int = 1) -> List[ActivationKey]:
    """Generate unused keys for a paid plan"""
    if plan.name == settings.DEFAULT_PLAN_NAME:
        raise BillingError(f"Keys cannot be generated for the {plan.name} plan")

    repo = ActivationKeyRepository(db)
    keys = []
    while len(keys) < count:
        key = generate_key(plan.name)
        if key in {k.key for k in keys} or await repo.key_exists(key):
            continue
        activation_key = ActivationKey(key=key, plan_id=plan.id, is_used=False)
        db.add(activation_key)
        keys.append(activation_key)

    await db.commit()
    logger.info(f"Generated {count} activation key(s) for {plan.name}")
    return keys
