# backend/app/services/subscription_service.py
import uuid
from datetime import datetime, timedelta
from typing import Dict, Any, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.constants import SubscriptionStatus, PaymentIntentStatus, UNLIMITED
from app.core.logging import logger
from app.db.models.plan import Plan
from app.db.models.subscription import Subscription
from app.db.models.payment_intent import PaymentIntent
from app.db.repositories.activation_key_repository import ActivationKeyRepository
from app.db.repositories.company_repository import CompanyRepository
from app.db.repositories.payment_intent_repository import PaymentIntentRepository
from app.db.repositories.plan_repository import PlanRepository
from app.db.repositories.subscription_repository import SubscriptionRepository
from app.services.bkash_service import BkashService
from app.services.exceptions import BillingError, PaymentProviderError
from app.services.stripe_service import StripeService


class SubscriptionService:
    """Plan resolution, limits, and the write-back side of every payment path"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.plans = PlanRepository(db)
        self.subscriptions = SubscriptionRepository(db)
        self.companies = CompanyRepository(db)

    async def current_plan(self, company_id: Any) -> Tuple[Optional[Plan], Optional[Subscription]]:
        """Latest active subscription's plan, else the default plan (may be None)"""
        subscription = await self.subscriptions.get_latest_active(company_id)
        if subscription is not None and subscription.plan is not None:
            return subscription.plan, subscription
        return await self.plans.get_by_name(settings.DEFAULT_PLAN_NAME), None

    async def limit_reached(self, company_id: Any, limit_field: str, current_count: int) -> Tuple[bool, Optional[Plan]]:
        """
        Check one plan limit

        Args:
            company_id: Company to check
            limit_field: room_limit, booking_limit or user_limit
            current_count: Rows the company already has

        Returns:
            (reached, plan); never reached when no plan resolves or the limit is unlimited
        """
        plan, _ = await self.current_plan(company_id)
        if plan is None:
            return False, None

        limit = getattr(plan, limit_field)
        if limit == UNLIMITED:
            return False, plan
        return current_count >= limit, plan

    async def activate_plan(self, company_id: Any, plan: Plan) -> Subscription:
        """Insert an active subscription for one billing period and mirror the plan name"""
        subscription = Subscription(
            company_id=company_id,
            plan_id=plan.id,
            status=SubscriptionStatus.ACTIVE.value,
            current_period_end=datetime.utcnow() + timedelta(days=settings.SUBSCRIPTION_PERIOD_DAYS),
        )
        self.db.add(subscription)
        await self.companies.set_plan_name(company_id, plan.name)
        await self.db.commit()
        await self.db.refresh(subscription)

        logger.info(
            f"Activated {plan.name} plan",
            extra={"company_id": str(company_id)},
        )
        return subscription

    async def redeem_key(self, company_id: Any, key: str) -> Plan:
        """Consume a one-time activation key"""
        key_repo = ActivationKeyRepository(self.db)
        activation_key = await key_repo.get_by_key(key.strip())

        if activation_key is None:
            raise BillingError("Invalid activation key")
        if activation_key.is_used:
            raise BillingError("Activation key has already been used")

        activation_key.is_used = True
        activation_key.used_by_company_id = company_id
        activation_key.used_at = datetime.utcnow()

        plan = activation_key.plan
        await self.activate_plan(company_id, plan)
        return plan

    # Stripe

    async def handle_stripe_event(self, event: Dict[str, Any], stripe: StripeService) -> None:
        """Apply a verified webhook event to the local subscription state"""
        event_type = event.get("type")
        obj = event.get("data", {}).get("object", {})
        logger.info(f"Received Stripe webhook: {event_type}")

        if event_type == "checkout.session.completed":
            await self._stripe_checkout_completed(obj, stripe)
        elif event_type == "invoice.payment_succeeded":
            await self._stripe_invoice_paid(obj, stripe)
        elif event_type == "invoice.payment_failed":
            await self._stripe_invoice_failed(obj)
        elif event_type == "customer.subscription.deleted":
            await self._stripe_subscription_deleted(obj)
        else:
            logger.info(f"Unhandled event type: {event_type}")

    @staticmethod
    def _period_end(subscription: Dict[str, Any]) -> Optional[datetime]:
        period_end = subscription.get("current_period_end")
        if period_end is None:
            return None
        return datetime.utcfromtimestamp(int(period_end))

    async def _stripe_checkout_completed(self, session: Dict[str, Any], stripe: StripeService) -> None:
        if session.get("mode") != "subscription" or not session.get("subscription"):
            return

        subscription = await stripe.retrieve_subscription(session["subscription"])
        company_id = (
            (subscription.get("metadata") or {}).get("company_id")
            or (session.get("metadata") or {}).get("company_id")
        )
        if not company_id:
            raise PaymentProviderError("No company_id found in subscription metadata")

        items = subscription.get("items", {}).get("data", [])
        price_id = items[0]["price"]["id"] if items else None
        plan = await self.plans.get_by_stripe_price(price_id) if price_id else None
        if plan is None:
            raise PaymentProviderError(f"No plan found for price ID: {price_id}")

        company = await self.companies.get_by_id(_as_uuid(company_id))
        if company is None:
            raise PaymentProviderError(f"Unknown company: {company_id}")

        await self.subscriptions.upsert_stripe(
            stripe_subscription_id=subscription["id"],
            company_id=company.id,
            plan_id=plan.id,
            status=subscription.get("status", SubscriptionStatus.ACTIVE.value),
            current_period_end=self._period_end(subscription),
        )
        await self.companies.set_plan_name(company.id, plan.name)
        await self.db.commit()

        logger.info(
            f"Successfully activated {plan.name} plan",
            extra={"company_id": str(company.id)},
        )

    async def _stripe_invoice_paid(self, invoice: Dict[str, Any], stripe: StripeService) -> None:
        if not invoice.get("subscription"):
            return

        remote = await stripe.retrieve_subscription(invoice["subscription"])
        subscription = await self.subscriptions.get_by_stripe_id(remote["id"])
        if subscription is None:
            logger.warning(f"Payment for unknown subscription {remote['id']}")
            return

        subscription.status = remote.get("status", subscription.status)
        subscription.current_period_end = self._period_end(remote)
        await self.db.commit()
        logger.info(f"Updated subscription {remote['id']} after successful payment")

    async def _stripe_invoice_failed(self, invoice: Dict[str, Any]) -> None:
        if not invoice.get("subscription"):
            return

        subscription = await self.subscriptions.get_by_stripe_id(invoice["subscription"])
        if subscription is None:
            return

        subscription.status = SubscriptionStatus.PAST_DUE.value
        await self.db.commit()
        logger.info(f"Marked subscription {invoice['subscription']} as past_due")

    async def _stripe_subscription_deleted(self, remote: Dict[str, Any]) -> None:
        subscription = await self.subscriptions.get_by_stripe_id(remote.get("id"))
        if subscription is None:
            return

        subscription.status = SubscriptionStatus.CANCELED.value
        await self.companies.set_plan_name(subscription.company_id, settings.DEFAULT_PLAN_NAME)
        await self.db.commit()
        logger.info(
            "Canceled subscription",
            extra={"company_id": str(subscription.company_id)},
        )

    # bKash

    async def start_bkash_payment(self, company_id: Any, user_id: Any, plan: Plan, bkash: BkashService) -> Dict[str, Any]:
        """Create a pending intent and the matching bKash payment"""
        if await self.subscriptions.get_latest_active(company_id) is not None:
            raise BillingError("Company already has an active subscription")

        id_token = await bkash.grant_token()

        intent = PaymentIntent(
            company_id=company_id,
            plan_id=plan.id,
            user_id=user_id,
            amount=plan.price,
            currency=bkash.currency,
            status=PaymentIntentStatus.PENDING.value,
        )
        self.db.add(intent)
        await self.db.commit()
        await self.db.refresh(intent)

        payment = await bkash.create_payment(id_token, plan.price, str(intent.id))

        intent.bkash_payment_id = payment["payment_id"]
        await self.db.commit()

        return payment

    async def verify_bkash_payment(self, user_id: Any, payment_id: str, bkash: BkashService) -> Dict[str, Any]:
        """
        Query a bKash payment and apply the outcome

        Returns:
            Dict with success, message and transaction_id or status.
            Repeated verification of a completed payment is not deduplicated.
        """
        intent = await PaymentIntentRepository(self.db).get_by_bkash_payment(payment_id, user_id)
        if intent is None:
            raise BillingError("Payment intent not found")

        id_token = await bkash.grant_token()
        result = await bkash.query_payment(id_token, payment_id)
        transaction_status = result.get("transaction_status")

        if transaction_status == "Completed":
            intent.status = PaymentIntentStatus.COMPLETED.value
            intent.bkash_trx_id = result.get("trx_id")
            plan = intent.plan
            await self.activate_plan(intent.company_id, plan)
            return {
                "success": True,
                "message": f"Payment successful! Your {plan.name} plan is now active.",
                "transaction_id": result.get("trx_id"),
            }

        intent.status = (transaction_status or "").lower() or PaymentIntentStatus.FAILED.value
        await self.db.commit()
        return {
            "success": False,
            "message": f"Payment {transaction_status or 'failed'}. Please try again.",
            "status": transaction_status,
        }


def _as_uuid(value: Any) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise PaymentProviderError(f"Invalid company id: {value}")
