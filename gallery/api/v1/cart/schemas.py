"""
Cart schemas for request/response validation
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from decimal import Decimal

from gallery.models.order import PurchaseType
from gallery.services.cart import CartLineItem

class CartQuoteRequest(BaseModel):
    """Client cart to be priced"""
    cart_items: List[CartLineItem] = Field(..., min_length=1)

class CartQuoteLine(BaseModel):
    id: str
    artwork_id: int
    title: str
    type: PurchaseType
    print_size: Optional[str]
    quantity: int
    unit_price: Decimal
    total_price: Decimal

class CartQuoteResponse(BaseModel):
    """Server-computed cart totals"""
    items: List[CartQuoteLine]
    total_items: int
    subtotal: Decimal
    shipping_cost: Decimal
    total: Decimal
    currency: str
    free_shipping_threshold: Decimal

    class Config:
        json_schema_extra = {
            "example": {
                "items": [],
                "total_items": 2,
                "subtotal": "40.00",
                "shipping_cost": "15.00",
                "total": "55.00",
                "currency": "USD",
                "free_shipping_threshold": "100.00"
            }
        }
