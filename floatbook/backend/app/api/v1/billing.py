# backend/app/api/v1/billing.py
from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.api.dependencies import (
    CompanyContext, get_company_context, get_current_active_user, require_permission,
)
from app.core.logging import logger
from app.core.rbac import Permission
from app.db.database import get_db
from app.db.models.user import User
from app.db.repositories.booking_repository import BookingRepository
from app.db.repositories.company_repository import CompanyRepository
from app.db.repositories.plan_repository import PlanRepository
from app.db.repositories.room_repository import RoomRepository
from app.schemas.billing import (
    ActivateKeyRequest, BkashCreateRequest, BkashCreateResponse, BkashVerifyRequest,
    BkashVerifyResponse, PlanUsage, StripeCheckoutRequest, StripeCheckoutResponse,
    SubscriptionInfo,
)
from app.schemas.plan import Plan
from app.services.bkash_service import BkashService
from app.services.exceptions import BillingError, PaymentProviderError
from app.services.stripe_service import StripeService
from app.services.subscription_service import SubscriptionService

router = APIRouter()


def _failure(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": message},
    )


@router.get("/plans", response_model=List[Plan])
async def list_plans(
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db)
):
    """Available plans, cheapest first"""
    return await PlanRepository(db).list_by_price()


@router.get("/subscription", response_model=SubscriptionInfo)
async def get_subscription(
    ctx: CompanyContext = Depends(get_company_context),
    db: AsyncSession = Depends(get_db)
):
    """Active subscription and its plan, or the default plan when none is active"""
    plan, subscription = await SubscriptionService(db).current_plan(ctx.company_id)

    if subscription is None:
        return SubscriptionInfo(plan=plan, status="free")

    return SubscriptionInfo(
        plan=plan,
        status=subscription.status,
        subscription_id=subscription.id,
        current_period_end=subscription.current_period_end,
        stripe_subscription_id=subscription.stripe_subscription_id,
    )


@router.get("/usage", response_model=PlanUsage)
async def get_usage(
    ctx: CompanyContext = Depends(get_company_context),
    db: AsyncSession = Depends(get_db)
):
    """Counts measured against the plan limits"""
    return PlanUsage(
        rooms=await RoomRepository(db).count_for_company(ctx.company_id),
        bookings=await BookingRepository(db).count_for_company(ctx.company_id),
        users=await CompanyRepository(db).count_members(ctx.company_id),
    )


@router.post("/stripe/checkout", response_model=StripeCheckoutResponse)
async def create_stripe_checkout(
    request: StripeCheckoutRequest,
    ctx: CompanyContext = Depends(require_permission(Permission.BILLING_MANAGE)),
):
    """Start a card subscription; the webhook records the outcome"""
    try:
        result = await StripeService().create_checkout_session(request.price_id, str(ctx.company_id))
    except PaymentProviderError as e:
        return _failure(e.message)

    return StripeCheckoutResponse(checkout_url=result["checkout_url"])


@router.post("/stripe/webhook")
async def stripe_webhook(request: Request, db: AsyncSession = Depends(get_db)):
    """Handle Stripe webhooks"""
    # Raw body is needed for signature verification
    body = await request.body()
    signature = request.headers.get("Stripe-Signature")

    stripe = StripeService()
    try:
        event = stripe.construct_event(body, signature)
        await SubscriptionService(db).handle_stripe_event(event, stripe)
    except PaymentProviderError as e:
        logger.error(f"Webhook error: {e.message}")
        await db.rollback()
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": e.message})

    return {"received": True}


@router.post("/bkash/create", response_model=BkashCreateResponse)
async def create_bkash_payment(
    request: BkashCreateRequest,
    ctx: CompanyContext = Depends(require_permission(Permission.BILLING_MANAGE)),
    db: AsyncSession = Depends(get_db)
):
    """Start a bKash payment for a plan"""
    plan = await PlanRepository(db).get(request.plan_id)
    if not plan:
        return _failure("Plan not found")

    try:
        payment = await SubscriptionService(db).start_bkash_payment(
            ctx.company_id, ctx.user.id, plan, BkashService()
        )
    except (BillingError, PaymentProviderError) as e:
        logger.error(
            f"bKash payment creation error: {e.message}",
            extra={"company_id": str(ctx.company_id)},
        )
        return _failure(e.message)

    return BkashCreateResponse(
        bkash_url=payment["bkash_url"],
        payment_id=payment["payment_id"],
    )


@router.post("/bkash/verify", response_model=BkashVerifyResponse)
async def verify_bkash_payment(
    request: BkashVerifyRequest,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db)
):
    """Verify a payment after the bKash callback redirect"""
    if request.status is not None and request.status != "success":
        return _failure(f"Payment {request.status}")

    try:
        result = await SubscriptionService(db).verify_bkash_payment(
            current_user.id, request.payment_id, BkashService()
        )
    except (BillingError, PaymentProviderError) as e:
        logger.error(
            f"bKash payment verification error: {e.message}",
            extra={"user_id": str(current_user.id)},
        )
        return _failure(e.message)

    if not result["success"]:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=result)

    return BkashVerifyResponse(**result)


@router.post("/activate-key")
async def activate_key(
    request: ActivateKeyRequest,
    ctx: CompanyContext = Depends(require_permission(Permission.BILLING_MANAGE)),
    db: AsyncSession = Depends(get_db)
):
    """Redeem a one-time activation key"""
    try:
        plan = await SubscriptionService(db).redeem_key(ctx.company_id, request.activation_key)
    except BillingError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    return {"message": f"Activation successful! Your {plan.name} plan is now active."}
