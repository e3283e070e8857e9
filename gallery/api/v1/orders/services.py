"""
Order service layer
Checkout orchestration and order status management
"""

from typing import Optional, Tuple
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gallery.core.config import settings
from gallery.core.exceptions import (
    NotFoundException, BadRequestException, InvalidPaymentException,
    PersistenceException, PaymentGatewayException
)
from gallery.models import Order, OrderItem, OrderStatus, PaymentMethod, PurchaseType
from gallery.models.base import utcnow
from gallery.services.catalog_pricing import CatalogPricer, PricedCart
from gallery.services.customer_service import CustomerService
from gallery.services.pricing import to_minor_units
from gallery.utils.helpers import generate_order_number
from gallery.utils.pagination import paginate
from gallery.api.v1.payments.bank_transfer import BankTransferGateway
from gallery.api.v1.payments.gateway import PaymentGateway
from .schemas import OrderCreate
from .state_machine import OrderStateMachine

logger = logging.getLogger(__name__)

class OrderService:
    """Order service for business logic"""

    def __init__(
        self,
        db: AsyncSession,
        gateway: Optional[PaymentGateway] = None,
        bank_gateway: Optional[BankTransferGateway] = None
    ):
        self.db = db
        self.gateway = gateway
        self.bank_gateway = bank_gateway or BankTransferGateway()
        self.state_machine = OrderStateMachine()

    def _order_query(self):
        return (
            select(Order)
            .options(
                selectinload(Order.customer),
                selectinload(Order.items).selectinload(OrderItem.artwork)
            )
            .execution_options(populate_existing=True)
        )

    async def _commit(self, action: str) -> None:
        """Commit or raise PersistenceException; the session is rolled back on failure"""
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to {action}: {str(e)}")
            raise PersistenceException(f"Failed to {action}")

    async def get_order(self, order_id: int) -> Order:
        """
        Get order with customer, items and item artworks (archived included)

        Raises:
            NotFoundException: If order not found
        """
        result = await self.db.execute(self._order_query().where(Order.id == order_id))
        order = result.scalar_one_or_none()

        if not order:
            raise NotFoundException("Order not found")

        return order

    async def get_by_idempotency_key(self, key: str) -> Optional[Order]:
        result = await self.db.execute(
            self._order_query().where(Order.idempotency_key == key)
        )
        return result.scalar_one_or_none()

    async def get_by_payment_intent(self, intent_id: str) -> Optional[Order]:
        result = await self.db.execute(
            self._order_query().where(Order.payment_intent_id == intent_id)
        )
        return result.scalar_one_or_none()

    async def _find_replay(self, data: OrderCreate) -> Optional[Order]:
        """Order an earlier submission of this checkout already created"""
        if data.idempotency_key:
            existing = await self.get_by_idempotency_key(data.idempotency_key)
            if existing:
                return existing
        if data.payment_method == PaymentMethod.CARD and data.payment_intent_id:
            return await self.get_by_payment_intent(data.payment_intent_id)
        return None

    async def create_order(self, data: OrderCreate) -> Tuple[Order, bool]:
        """
        Checkout: price, resolve customer, persist, then settle payment

        Card orders need an existing payment intent whose amount matches the
        server total. With a payment confirmation (or an intent the processor
        already reports paid) the order ends up completed, otherwise pending.
        Bank-transfer orders are created pending with transfer instructions.

        Args:
            data: Checkout payload

        Returns:
            (order, created); created is False for an idempotent replay

        Raises:
            ValidationException / NotFoundException: Bad cart, before any write
            InvalidPaymentException: Intent amount or confirmation mismatch
            PaymentGatewayException: Processor unreachable, before any write
            PersistenceException: Storage failure
        """
        if data.idempotency_key:
            existing = await self.get_by_idempotency_key(data.idempotency_key)
            if existing:
                logger.info(f"Idempotent replay of order {existing.id} ({data.idempotency_key})")
                return existing, False

        priced = await CatalogPricer(self.db).price_cart(data.cart_items)
        totals = priced.totals

        paid_confirmation = None
        if data.payment_method == PaymentMethod.CARD:
            existing = await self.get_by_payment_intent(data.payment_intent_id)
            if existing:
                logger.info(
                    f"Payment intent {data.payment_intent_id} already has order {existing.id}"
                )
                return existing, False
            paid_confirmation = await self._verify_card_payment(data, priced)

        customer = await CustomerService(self.db).resolve_customer(
            data.customer_data.email,
            data.customer_data.model_dump(exclude={"email"})
        )

        currency = (
            settings.BANK_TRANSFER_CURRENCY
            if data.payment_method == PaymentMethod.BANK_TRANSFER
            else settings.CURRENCY
        )

        order = Order(
            order_number=generate_order_number(),
            idempotency_key=data.idempotency_key,
            customer_id=customer.id,
            status=OrderStatus.PENDING,
            subtotal=totals.subtotal,
            shipping_cost=totals.shipping_cost,
            total_amount=totals.total,
            currency=currency.upper(),
            payment_method=data.payment_method,
            payment_intent_id=data.payment_intent_id,
            special_instructions=data.special_instructions,
            items=[
                OrderItem(
                    artwork_id=line.artwork.id,
                    artwork_title=line.artwork.title,
                    type=line.type,
                    print_size=line.print_size,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    total_price=line.total_price,
                )
                for line in priced.lines
            ],
        )
        self.db.add(order)

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            existing = await self._find_replay(data)
            if existing:
                logger.info(f"Concurrent replay resolved to order {existing.id}")
                return existing, False
            logger.error("Order insert violated a constraint")
            raise PersistenceException("Failed to create order")
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to create order: {str(e)}")
            raise PersistenceException("Failed to create order")

        order_id = order.id
        logger.info(
            f"Order created: {order_id} ({order.order_number}) "
            f"method={data.payment_method.value} total={totals.total}"
        )

        if paid_confirmation is not None:
            await self._complete(order_id, payment_reference=paid_confirmation)
        elif data.payment_method == PaymentMethod.BANK_TRANSFER:
            await self._attach_transfer_instructions(order_id)

        return await self.get_order(order_id), True

    async def _verify_card_payment(self, data: OrderCreate, priced: PricedCart) -> Optional[str]:
        """
        Check the intent against the server total and confirm the payment if
        the client sent a confirmation

        Returns:
            Payment reference when the payment is settled, else None
        """
        if self.gateway is None:
            raise PaymentGatewayException("Card payments are not configured")

        expected_amount = to_minor_units(priced.totals.total)
        intent = await self.gateway.get_intent_status(data.payment_intent_id)

        if intent.amount != expected_amount:
            logger.warning(
                f"Intent {data.payment_intent_id} amount {intent.amount} "
                f"does not match order total {expected_amount}"
            )
            raise InvalidPaymentException("Payment amount does not match order total")

        if data.payment_id:
            confirmation = await self.gateway.confirm_payment(
                data.payment_intent_id,
                data.payment_id,
                data.payment_signature,
                expected_amount
            )
            return confirmation.payment_id

        if intent.is_paid:
            return data.payment_intent_id

        return None

    async def _attach_transfer_instructions(self, order_id: int) -> None:
        order = await self.get_order(order_id)
        instructions = self.bank_gateway.create_instructions(order)
        order.payment_intent_id = instructions["transfer_reference"]
        order.transfer_instructions = instructions
        await self._commit("attach transfer instructions")
        logger.info(f"Transfer instructions issued for order {order_id}")

    async def _complete(self, order_id: int, payment_reference: Optional[str] = None) -> Order:
        """Move a pending order to completed and mark its originals sold"""
        order = await self.get_order(order_id)
        self.state_machine.ensure_transition(order.status, OrderStatus.COMPLETED)

        order.status = OrderStatus.COMPLETED
        order.completed_at = utcnow()
        if payment_reference:
            order.payment_reference = payment_reference

        for item in order.items:
            if item.type == PurchaseType.ORIGINAL and item.artwork is not None:
                item.artwork.mark_original_sold()

        await self._commit("complete order")
        logger.info(f"Order completed: {order_id}")
        return await self.get_order(order_id)

    async def complete_order(
        self,
        order_id: int,
        payment_id: str,
        payment_signature: str
    ) -> Order:
        """
        Confirm payment for a pending card order and complete it

        A completed order is returned unchanged. If the status write fails the
        order stays pending.
        """
        order = await self.get_order(order_id)

        if order.status == OrderStatus.COMPLETED:
            return order

        if order.payment_method != PaymentMethod.CARD:
            raise BadRequestException(
                "Bank transfer orders are completed by an administrator",
                error_code="MANUAL_COMPLETION_REQUIRED"
            )

        self.state_machine.ensure_transition(order.status, OrderStatus.COMPLETED)

        if not order.payment_intent_id:
            raise InvalidPaymentException("Order has no payment intent")
        if self.gateway is None:
            raise PaymentGatewayException("Card payments are not configured")

        confirmation = await self.gateway.confirm_payment(
            order.payment_intent_id,
            payment_id,
            payment_signature,
            to_minor_units(order.total_amount)
        )
        return await self._complete(order_id, payment_reference=confirmation.payment_id)

    async def complete_by_intent(
        self,
        intent_id: str,
        payment_reference: Optional[str] = None
    ) -> Optional[Order]:
        """Complete the pending card order carrying this intent, if any"""
        order = await self.get_by_payment_intent(intent_id)
        if order is None:
            logger.info(f"No order for payment intent {intent_id}")
            return None
        if order.payment_method != PaymentMethod.CARD or order.status != OrderStatus.PENDING:
            return order
        return await self._complete(order.id, payment_reference=payment_reference)

    async def update_order_status(self, order_id: int, new_status: OrderStatus) -> Order:
        """
        Admin status change through the state machine

        Setting the current status again is a no-op.
        """
        order = await self.get_order(order_id)

        if order.status == new_status:
            return order

        self.state_machine.ensure_transition(order.status, new_status)

        if new_status == OrderStatus.COMPLETED:
            return await self._complete(order_id)

        order.status = new_status
        await self._commit(f"mark order {new_status.value}")
        logger.info(f"Order {order_id} marked {new_status.value}")
        return await self.get_order(order_id)

    async def list_orders(
        self,
        status: Optional[OrderStatus] = None,
        page: int = 1,
        size: int = 20
    ) -> dict:
        """Orders newest first"""
        query = self._order_query().order_by(Order.created_at.desc(), Order.id.desc())
        if status:
            query = query.where(Order.status == status)
        return await paginate(self.db, query, page, size)
