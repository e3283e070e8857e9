"""
Order API routes
"""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.database import get_db
from gallery.core.rate_limit import checkout_limit
from gallery.api.v1.payments.bank_transfer import BankTransferGateway
from gallery.api.v1.payments.dependencies import get_bank_transfer_gateway, get_payment_gateway
from gallery.api.v1.payments.gateway import PaymentGateway
from .schemas import (
    OrderCreate,
    OrderCompleteRequest,
    OrderResponse
)
from .services import OrderService

router = APIRouter()

@router.post(
    "/",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create order",
    description="Checkout a cart. Replays with the same idempotency key return the original order with 200."
)
@checkout_limit
async def create_order(
    request: Request,
    response: Response,
    order_data: OrderCreate,
    gateway: PaymentGateway = Depends(get_payment_gateway),
    bank_gateway: BankTransferGateway = Depends(get_bank_transfer_gateway),
    db: AsyncSession = Depends(get_db)
):
    """Create new order"""
    service = OrderService(db, gateway=gateway, bank_gateway=bank_gateway)
    order, created = await service.create_order(order_data)
    if not created:
        response.status_code = status.HTTP_200_OK
    return OrderResponse.model_validate(order)

@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Get order details",
    description="Order with customer and items"
)
async def get_order(
    order_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Get order details"""
    service = OrderService(db)
    order = await service.get_order(order_id)
    return OrderResponse.model_validate(order)

@router.post(
    "/{order_id}/complete",
    response_model=OrderResponse,
    summary="Complete order",
    description="Confirm card payment for a pending order"
)
async def complete_order(
    order_id: int,
    complete_data: OrderCompleteRequest,
    gateway: PaymentGateway = Depends(get_payment_gateway),
    db: AsyncSession = Depends(get_db)
):
    """Complete order after payment"""
    service = OrderService(db, gateway=gateway)
    order = await service.complete_order(
        order_id=order_id,
        payment_id=complete_data.payment_id,
        payment_signature=complete_data.payment_signature
    )
    return OrderResponse.model_validate(order)
