# backend/app/db/models/__init__.py
from app.db.models.company import Company
from app.db.models.user import User
from app.db.models.company_user import CompanyUser
from app.db.models.room import Room
from app.db.models.booking import Booking
from app.db.models.plan import Plan
from app.db.models.subscription import Subscription
from app.db.models.activation_key import ActivationKey
from app.db.models.payment_intent import PaymentIntent

__all__ = [
    "Company",
    "User",
    "CompanyUser",
    "Room",
    "Booking",
    "Plan",
    "Subscription",
    "ActivationKey",
    "PaymentIntent",
]
