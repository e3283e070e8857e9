"""
Order schemas for request/response validation
"""

from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
from decimal import Decimal

from gallery.api.v1.artworks.schemas import ArtworkSummary
from gallery.models.order import OrderStatus, PaymentMethod, PurchaseType
from gallery.services.cart import CartLineItem
from gallery.utils.pagination import PaginatedResponse

class CustomerData(BaseModel):
    """Customer details entered at checkout"""
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    zip_code: Optional[str] = Field(None, max_length=20)
    country: Optional[str] = Field(None, max_length=100)

class CustomerResponse(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    phone: Optional[str]
    address: Optional[str]
    city: Optional[str]
    zip_code: Optional[str]
    country: Optional[str]

    class Config:
        from_attributes = True

class OrderCreate(BaseModel):
    """Schema for creating order"""
    customer_data: CustomerData
    cart_items: List[CartLineItem] = Field(..., min_length=1)
    payment_method: PaymentMethod = PaymentMethod.CARD

    # Card path
    payment_intent_id: Optional[str] = Field(None, max_length=255)
    payment_id: Optional[str] = Field(None, max_length=255)
    payment_signature: Optional[str] = Field(None, max_length=255)

    special_instructions: Optional[str] = Field(None, max_length=2000)
    idempotency_key: Optional[str] = Field(None, min_length=8, max_length=255)

    @model_validator(mode="after")
    def validate_payment_fields(self):
        if self.payment_method == PaymentMethod.CARD and not self.payment_intent_id:
            raise ValueError("payment_intent_id is required for card payments")
        if bool(self.payment_id) != bool(self.payment_signature):
            raise ValueError("payment_id and payment_signature must be sent together")
        return self

class OrderCompleteRequest(BaseModel):
    """Payment confirmation for a pending card order"""
    payment_id: str = Field(..., min_length=1, max_length=255)
    payment_signature: str = Field(..., min_length=1, max_length=255)

class OrderStatusUpdate(BaseModel):
    status: OrderStatus

class OrderItemResponse(BaseModel):
    """Schema for order item response"""
    id: int
    artwork_id: int
    artwork_title: str
    type: PurchaseType
    print_size: Optional[str]
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    artwork: Optional[ArtworkSummary] = None

    class Config:
        from_attributes = True

class OrderResponse(BaseModel):
    """Schema for order response"""
    id: int
    order_number: str
    status: OrderStatus

    # Amounts
    subtotal: Decimal
    shipping_cost: Decimal
    total_amount: Decimal
    currency: str

    # Payment
    payment_method: PaymentMethod
    payment_intent_id: Optional[str]
    transfer_instructions: Optional[Dict[str, Any]] = None

    special_instructions: Optional[str]
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime]

    # Related data
    customer: CustomerResponse
    items: List[OrderItemResponse]

    class Config:
        from_attributes = True

class OrderListResponse(PaginatedResponse[OrderResponse]):
    """Paginated orders"""
