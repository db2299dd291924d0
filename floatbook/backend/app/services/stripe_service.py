# backend/app/services/stripe_service.py
import httpx
import hashlib
import hmac
import json
import time
from typing import Dict, Any, Optional

from app.core.config import settings
from app.core.logging import logger
from app.services.exceptions import PaymentProviderError


class StripeService:
    """Service for Stripe card subscriptions (REST API, form-encoded)"""

    def __init__(self):
        self.secret_key = settings.STRIPE_SECRET_KEY
        self.webhook_secret = settings.STRIPE_WEBHOOK_SECRET
        self.base_url = settings.STRIPE_API_BASE or "https://api.stripe.com"
        self.tolerance = settings.STRIPE_WEBHOOK_TOLERANCE_SECONDS

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.secret_key}"}

    @staticmethod
    def _error_message(result: Dict[str, Any]) -> str:
        return result.get("error", {}).get("message", "Unknown error")

    async def create_checkout_session(self, price_id: str, company_id: str) -> Dict[str, Any]:
        """
        Create a Checkout session in subscription mode

        Args:
            price_id: Stripe price of the plan being bought
            company_id: Company the subscription is for (stored in subscription metadata)

        Returns:
            Dict with session_id and checkout_url
        """
        data = {
            "mode": "subscription",
            "payment_method_types[0]": "card",
            "line_items[0][price]": price_id,
            "line_items[0][quantity]": "1",
            "success_url": f"{settings.FRONTEND_URL}/stripe/success?session_id={{CHECKOUT_SESSION_ID}}",
            "cancel_url": f"{settings.FRONTEND_URL}/settings?tab=plans&canceled=true",
            "subscription_data[metadata][company_id]": str(company_id),
            "metadata[company_id]": str(company_id),
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"{self.base_url}/v1/checkout/sessions",
                    data=data,
                    headers=self._headers(),
                    timeout=30.0,
                )

                result = response.json()

                if response.status_code != 200:
                    logger.error(f"Stripe error: {result}")
                    raise PaymentProviderError(
                        f"Failed to create checkout: {self._error_message(result)}"
                    )

                logger.info(f"Created Stripe checkout session: {result.get('id')}")

                return {
                    "session_id": result.get("id"),
                    "checkout_url": result.get("url"),
                }

        except httpx.HTTPError as e:
            logger.error(f"Stripe checkout creation failed: {str(e)}")
            raise PaymentProviderError(f"Stripe unavailable: {str(e)}")

    async def retrieve_subscription(self, subscription_id: str) -> Dict[str, Any]:
        """Fetch a subscription with its items, status and period end"""
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    f"{self.base_url}/v1/subscriptions/{subscription_id}",
                    headers=self._headers(),
                    timeout=30.0,
                )

                result = response.json()

                if response.status_code != 200:
                    logger.error(f"Stripe error: {result}")
                    raise PaymentProviderError(
                        f"Failed to retrieve subscription: {self._error_message(result)}"
                    )

                return result

        except httpx.HTTPError as e:
            logger.error(f"Failed to retrieve subscription: {str(e)}")
            raise PaymentProviderError(f"Stripe unavailable: {str(e)}")

    def construct_event(self, payload: bytes, signature: Optional[str]) -> Dict[str, Any]:
        """
        Verify a webhook payload and parse it into an event

        Args:
            payload: Raw request body
            signature: Stripe-Signature header value ("t=...,v1=...")

        Returns:
            The parsed event dict

        Raises:
            PaymentProviderError: missing secret/header, bad signature or stale timestamp
        """
        if not signature or not self.webhook_secret:
            raise PaymentProviderError("Missing stripe signature or webhook secret")

        timestamp = None
        candidates = []
        for part in signature.split(","):
            key, _, value = part.strip().partition("=")
            if key == "t":
                timestamp = value
            elif key == "v1":
                candidates.append(value)

        if not timestamp or not candidates:
            raise PaymentProviderError("Malformed stripe signature header")

        try:
            body = payload.decode("utf-8")
        except UnicodeDecodeError:
            raise PaymentProviderError("Invalid payload encoding")

        expected_signature = hmac.new(
            self.webhook_secret.encode(),
            f"{timestamp}.{body}".encode(),
            hashlib.sha256
        ).hexdigest()

        if not any(hmac.compare_digest(expected_signature, c) for c in candidates):
            logger.warning("Invalid Stripe webhook signature")
            raise PaymentProviderError("Invalid signature")

        try:
            signed_at = int(timestamp)
        except ValueError:
            raise PaymentProviderError("Malformed stripe signature header")

        if self.tolerance and abs(time.time() - signed_at) > self.tolerance:
            raise PaymentProviderError("Timestamp outside the tolerance zone")

        try:
            return json.loads(body)
        except json.JSONDecodeError:
            raise PaymentProviderError("Invalid JSON")
