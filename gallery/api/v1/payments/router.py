"""
Payment API routes
"""

from fastapi import APIRouter, Depends, Header, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.database import get_db
from gallery.core.rate_limit import checkout_limit
from .dependencies import get_payment_gateway
from .gateway import PaymentGateway
from .schemas import PaymentIntentCreate, PaymentIntentResponse, WebhookAck
from .services import PaymentService

router = APIRouter()

@router.post(
    "/create-payment-intent",
    response_model=PaymentIntentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create payment intent",
    description="Open a payment intent for the server-computed cart total"
)
@checkout_limit
async def create_payment_intent(
    request: Request,
    intent_data: PaymentIntentCreate,
    gateway: PaymentGateway = Depends(get_payment_gateway),
    db: AsyncSession = Depends(get_db)
):
    """Create payment intent"""
    service = PaymentService(db, gateway)
    result = await service.create_payment_intent(intent_data)
    return PaymentIntentResponse(**result)

@router.post(
    "/payments/webhook",
    response_model=WebhookAck,
    summary="Payment webhook",
    description="Signed processor events"
)
async def payment_webhook(
    request: Request,
    x_razorpay_signature: str = Header(""),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    db: AsyncSession = Depends(get_db)
):
    """Handle processor webhook"""
    body = await request.body()
    service = PaymentService(db, gateway)
    result = await service.handle_webhook(body, x_razorpay_signature)
    return WebhookAck(**result)
