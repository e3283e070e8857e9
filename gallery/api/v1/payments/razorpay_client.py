"""
Razorpay payment gateway integration
A Razorpay order plays the role of the payment intent.
"""

from functools import partial
from typing import Dict, Any, Optional
import asyncio
import hmac
import hashlib
import logging

from gallery.core.config import settings
from gallery.core.exceptions import InvalidPaymentException, PaymentGatewayException
from .gateway import PaymentIntent, IntentStatus, PaymentConfirmation

logger = logging.getLogger(__name__)

def _hmac_sha256(secret: str, message: bytes) -> str:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()

class RazorpayGateway:
    """Razorpay API client wrapper"""

    def __init__(
        self,
        key_id: Optional[str] = None,
        key_secret: Optional[str] = None,
        webhook_secret: Optional[str] = None
    ):
        import razorpay
        from razorpay.errors import BadRequestError

        self.key_id = key_id or settings.RAZORPAY_KEY_ID
        self.key_secret = key_secret or settings.RAZORPAY_KEY_SECRET
        self.webhook_secret = webhook_secret or settings.RAZORPAY_WEBHOOK_SECRET
        self.client = razorpay.Client(auth=(self.key_id, self.key_secret))
        self._bad_request = BadRequestError

    @property
    def public_key(self) -> Optional[str]:
        return self.key_id or None

    async def _call(self, func, *args, **kwargs):
        """Run a blocking SDK call in the thread pool"""
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, partial(func, *args, **kwargs))
        except self._bad_request as e:
            logger.warning(f"Razorpay rejected request: {str(e)}")
            raise InvalidPaymentException(f"Payment rejected: {str(e)}")
        except Exception as e:
            logger.error(f"Razorpay call failed: {str(e)}")
            raise PaymentGatewayException(f"Payment processor error: {str(e)}")

    async def create_intent(
        self,
        amount: int,
        currency: str,
        receipt: Optional[str] = None,
        notes: Optional[Dict[str, Any]] = None
    ) -> PaymentIntent:
        """
        Create Razorpay order

        Args:
            amount: Amount in smallest currency unit
            currency: Currency code
            receipt: Receipt number
            notes: Additional notes

        Returns:
            Payment intent handle
        """
        order = await self._call(
            self.client.order.create,
            data={
                "amount": amount,
                "currency": currency.upper(),
                "receipt": receipt or "",
                "notes": notes or {},
            }
        )
        return PaymentIntent(
            intent_id=order["id"],
            amount=int(order["amount"]),
            currency=order.get("currency", currency.upper()),
            status=order.get("status", "created"),
        )

    async def get_intent_status(self, intent_id: str) -> IntentStatus:
        order = await self._call(self.client.order.fetch, intent_id)
        return IntentStatus(
            intent_id=order["id"],
            status=order.get("status", "created"),
            amount=int(order.get("amount", 0)),
            amount_paid=int(order.get("amount_paid", 0)),
            currency=order.get("currency"),
        )

    def verify_payment_signature(
        self,
        intent_id: str,
        payment_id: str,
        signature: str
    ) -> bool:
        """Checkout signature is HMAC-SHA256 of "order_id|payment_id" with the key secret"""
        expected = _hmac_sha256(self.key_secret, f"{intent_id}|{payment_id}".encode("utf-8"))
        return hmac.compare_digest(expected, signature or "")

    def verify_webhook_signature(self, body: bytes, signature: str) -> bool:
        """Webhook signature is HMAC-SHA256 of the raw body with the webhook secret"""
        if not self.webhook_secret:
            return False
        expected = _hmac_sha256(self.webhook_secret, body)
        return hmac.compare_digest(expected, signature or "")

    async def confirm_payment(
        self,
        intent_id: str,
        payment_id: str,
        signature: str,
        expected_amount: int
    ) -> PaymentConfirmation:
        """
        Verify and capture a payment made against an intent

        Raises:
            InvalidPaymentException: Bad signature, wrong order, wrong amount or failed payment
            PaymentGatewayException: Processor unreachable
        """
        if not self.verify_payment_signature(intent_id, payment_id, signature):
            raise InvalidPaymentException("Invalid payment signature")

        payment = await self._call(self.client.payment.fetch, payment_id)

        if payment.get("order_id") != intent_id:
            raise InvalidPaymentException("Payment does not belong to this payment intent")
        if int(payment.get("amount", 0)) != expected_amount:
            raise InvalidPaymentException("Payment amount does not match order total")

        status = payment.get("status")
        if status == "authorized":
            payment = await self._call(
                self.client.payment.capture,
                payment_id,
                expected_amount,
                {"currency": payment.get("currency")}
            )
            status = payment.get("status")

        if status != "captured":
            raise InvalidPaymentException(f"Payment not successful (status: {status})")

        return PaymentConfirmation(
            payment_id=payment_id,
            intent_id=intent_id,
            amount=int(payment.get("amount", expected_amount)),
            status=status,
            raw=payment,
        )
