"""
Cart API routes
The cart itself is held by the client; the server only prices it.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.config import settings
from gallery.core.database import get_db
from gallery.services.catalog_pricing import CatalogPricer
from gallery.services.pricing import quantize
from .schemas import CartQuoteRequest, CartQuoteResponse, CartQuoteLine

router = APIRouter()

@router.post(
    "/quote",
    response_model=CartQuoteResponse,
    summary="Quote cart",
    description="Price a client cart against the current catalog"
)
async def quote_cart(
    quote_data: CartQuoteRequest,
    db: AsyncSession = Depends(get_db)
):
    """Quote cart totals"""
    pricer = CatalogPricer(db)
    priced = await pricer.price_cart(quote_data.cart_items)

    items = [
        CartQuoteLine(
            id=f"{line.artwork.id}-{line.type.value}-{line.print_size or 'original'}",
            artwork_id=line.artwork.id,
            title=line.artwork.title,
            type=line.type,
            print_size=line.print_size,
            quantity=line.quantity,
            unit_price=line.unit_price,
            total_price=line.total_price,
        )
        for line in priced.lines
    ]

    return CartQuoteResponse(
        items=items,
        total_items=sum(line.quantity for line in priced.lines),
        currency=settings.CURRENCY,
        free_shipping_threshold=quantize(pricer.policy.free_shipping_threshold),
        **priced.totals.as_dict()
    )
