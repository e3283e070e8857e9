"""
Payment service layer
Payment intent creation and processor webhooks
"""

from typing import Any, Dict
import json
import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.config import settings
from gallery.core.exceptions import BadRequestException, ValidationException
from gallery.services.catalog_pricing import CatalogPricer
from gallery.services.pricing import quantize, to_minor_units
from gallery.api.v1.orders.services import OrderService
from .gateway import PaymentGateway
from .schemas import PaymentIntentCreate

logger = logging.getLogger(__name__)

COMPLETING_EVENTS = ("payment.captured", "order.paid")

class PaymentService:
    """Payment service for business logic"""

    def __init__(self, db: AsyncSession, gateway: PaymentGateway):
        self.db = db
        self.gateway = gateway

    async def create_payment_intent(self, data: PaymentIntentCreate) -> Dict[str, Any]:
        """
        Open a payment intent for the server-computed cart total

        A client-sent amount is compared and logged, never charged.

        Raises:
            ValidationException: Bad cart or unsupported currency
            NotFoundException: Unknown artwork
            PaymentGatewayException: Processor unreachable
        """
        currency = (data.currency or settings.CURRENCY).upper()
        if currency != settings.CURRENCY.upper():
            raise ValidationException(
                f"Unsupported currency {currency}",
                field="currency"
            )

        priced = await CatalogPricer(self.db).price_cart(data.cart_items)
        totals = priced.totals

        if data.amount is not None and quantize(data.amount) != totals.total:
            logger.warning(
                f"Client amount {data.amount} differs from server total {totals.total}; "
                "charging server total"
            )

        notes = {"items": str(len(priced.lines))}
        if data.customer_data:
            notes["email"] = data.customer_data.email

        intent = await self.gateway.create_intent(
            amount=to_minor_units(totals.total),
            currency=currency,
            receipt=f"cart_{uuid.uuid4().hex[:16]}",
            notes=notes
        )
        logger.info(f"Payment intent {intent.intent_id} opened for {totals.total} {currency}")

        return {
            "payment_intent_id": intent.intent_id,
            "amount": totals.total,
            "amount_minor": intent.amount,
            "currency": currency,
            "subtotal": totals.subtotal,
            "shipping_cost": totals.shipping_cost,
            "key_id": self.gateway.public_key,
        }

    async def handle_webhook(self, body: bytes, signature: str) -> Dict[str, Any]:
        """
        Process a signed processor event

        Payment captured / order paid events complete the matching pending
        card order. Other events are acknowledged.
        """
        if not self.gateway.verify_webhook_signature(body, signature):
            raise BadRequestException("Invalid webhook signature", error_code="INVALID_SIGNATURE")

        try:
            event_data = json.loads(body)
        except ValueError:
            raise BadRequestException("Malformed webhook payload")

        event = event_data.get("event")
        if event not in COMPLETING_EVENTS:
            logger.info(f"Ignoring webhook event {event}")
            return {"status": "ignored", "event": event}

        payload = event_data.get("payload", {})
        payment = payload.get("payment", {}).get("entity", {})
        intent_id = payment.get("order_id") or payload.get("order", {}).get("entity", {}).get("id")
        if not intent_id:
            raise BadRequestException("Webhook payload has no order reference")

        order = await OrderService(self.db, gateway=self.gateway).complete_by_intent(
            intent_id,
            payment_reference=payment.get("id")
        )
        logger.info(f"Webhook {event} for intent {intent_id} handled")

        return {
            "status": "ok",
            "event": event,
            "order_id": order.id if order else None,
        }
