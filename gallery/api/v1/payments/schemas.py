"""
Payment schemas for request/response validation
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from decimal import Decimal

from gallery.api.v1.orders.schemas import CustomerData
from gallery.services.cart import CartLineItem

class PaymentIntentCreate(BaseModel):
    """Open a payment intent for a cart; the amount is computed server-side"""
    cart_items: List[CartLineItem] = Field(..., min_length=1)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    customer_data: Optional[CustomerData] = None
    amount: Optional[Decimal] = Field(None, ge=0, description="Client total, advisory only")

class PaymentIntentResponse(BaseModel):
    """Response for payment intent creation"""
    payment_intent_id: str
    amount: Decimal
    amount_minor: int
    currency: str
    subtotal: Decimal
    shipping_cost: Decimal

    # Razorpay checkout key
    key_id: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "payment_intent_id": "order_ABC123DEF456",
                "amount": "55.00",
                "amount_minor": 5500,
                "currency": "USD",
                "subtotal": "40.00",
                "shipping_cost": "15.00",
                "key_id": "rzp_test_1234567890"
            }
        }

class WebhookAck(BaseModel):
    status: str = "ok"
    event: Optional[str] = None
    order_id: Optional[int] = None
