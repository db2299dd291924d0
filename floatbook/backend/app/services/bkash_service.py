# backend/app/services/bkash_service.py
import httpx
from typing import Dict, Any

from app.core.config import settings
from app.core.logging import logger
from app.services.exceptions import PaymentProviderError


class BkashService:
    """Service for bKash tokenized checkout"""

    def __init__(self):
        self.base_url = settings.BKASH_BASE_URL
        self.username = settings.BKASH_USERNAME
        self.password = settings.BKASH_PASSWORD
        self.app_key = settings.BKASH_APP_KEY
        self.app_secret = settings.BKASH_APP_SECRET
        self.currency = settings.BKASH_CURRENCY

    async def _post(self, path: str, payload: Dict[str, Any], headers: Dict[str, str]) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"{self.base_url}{path}",
                    json=payload,
                    headers={
                        "Content-Type": "application/json",
                        "Accept": "application/json",
                        **headers,
                    },
                    timeout=30.0,
                )
                return response.json()

        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"bKash request to {path} failed: {str(e)}")
            raise PaymentProviderError(f"bKash unavailable: {str(e)}")

    async def grant_token(self) -> str:
        """Get an id_token for subsequent checkout calls"""
        result = await self._post(
            "/tokenized/checkout/token/grant",
            {"app_key": self.app_key, "app_secret": self.app_secret},
            {"username": self.username, "password": self.password},
        )

        id_token = result.get("id_token")
        if not id_token:
            logger.error(f"bKash token grant failed: {result}")
            raise PaymentProviderError("Failed to get bKash auth token")
        return id_token

    async def create_payment(self, id_token: str, amount: float, invoice_number: str) -> Dict[str, Any]:
        """
        Create a sale payment

        Args:
            id_token: Token from grant_token
            amount: Amount in BDT
            invoice_number: Merchant invoice number (the payment intent id)

        Returns:
            Dict with payment_id and bkash_url
        """
        result = await self._post(
            "/tokenized/checkout/create",
            {
                "mode": "0011",
                "payerReference": " ",
                "callbackURL": f"{settings.FRONTEND_URL}/bkash/callback",
                "amount": str(amount),
                "currency": self.currency,
                "intent": "sale",
                "merchantInvoiceNumber": invoice_number,
            },
            {"authorization": id_token, "x-app-key": self.app_key},
        )

        if not result.get("bkashURL"):
            logger.error(f"bKash payment creation failed: {result}")
            raise PaymentProviderError(
                "Failed to create bKash payment: " + (result.get("errorMessage") or "Unknown error")
            )

        logger.info(f"Created bKash payment: {result.get('paymentID')}")

        return {
            "payment_id": result.get("paymentID"),
            "bkash_url": result.get("bkashURL"),
        }

    async def query_payment(self, id_token: str, payment_id: str) -> Dict[str, Any]:
        """Query a payment; transaction_status is e.g. Completed, Initiated, Failed"""
        result = await self._post(
            "/tokenized/checkout/payment/status",
            {"paymentID": payment_id},
            {"authorization": id_token, "x-app-key": self.app_key},
        )

        return {
            "transaction_status": result.get("transactionStatus"),
            "trx_id": result.get("trxID"),
            "raw": result,
        }
