"""
Server-side cart pricing
Re-prices every cart line from the catalog before any charge or order write.
Client-supplied prices are never used.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.config import settings
from gallery.core.exceptions import (
    ArtworkUnavailableException, NotFoundException, ValidationException
)
from gallery.models import Artwork, PurchaseType
from .cart import CartLineItem
from .pricing import ShippingPolicy, Totals, compute_totals, line_total, quantize

logger = logging.getLogger(__name__)

@dataclass
class PricedLine:
    artwork: Artwork
    type: PurchaseType
    print_size: Optional[str]
    quantity: int
    unit_price: Decimal

    @property
    def total_price(self) -> Decimal:
        return line_total(self.unit_price, self.quantity)

@dataclass
class PricedCart:
    lines: List[PricedLine]
    totals: Totals

def merge_lines(items: Iterable[CartLineItem]) -> List[CartLineItem]:
    """Collapse repeated (artwork, type, size) lines, summing quantities"""
    merged: Dict[str, CartLineItem] = {}
    for item in items:
        if item.id in merged:
            existing = merged[item.id]
            merged[item.id] = existing.model_copy(
                update={"quantity": existing.quantity + item.quantity}
            )
        else:
            merged[item.id] = item
    return list(merged.values())

class CatalogPricer:
    """Prices a client cart against the live catalog"""

    def __init__(
        self,
        db: AsyncSession,
        policy: Optional[ShippingPolicy] = None,
        max_print_quantity: Optional[int] = None
    ):
        self.db = db
        self.policy = policy or ShippingPolicy.from_settings()
        self.max_print_quantity = max_print_quantity or settings.MAX_PRINT_QUANTITY

    async def _load_artworks(self, artwork_ids: List[int]) -> Dict[int, Artwork]:
        result = await self.db.execute(
            select(Artwork).where(
                Artwork.id.in_(artwork_ids),
                Artwork.is_deleted.is_(False)
            )
        )
        return {artwork.id: artwork for artwork in result.scalars().all()}

    def _unit_price(self, artwork: Artwork, item: CartLineItem) -> Tuple[Decimal, int]:
        if item.type == PurchaseType.ORIGINAL:
            if not artwork.is_original_for_sale:
                raise ArtworkUnavailableException(
                    f"The original of '{artwork.title}' is not available"
                )
            if item.quantity != 1:
                raise ValidationException(
                    "Originals can only be bought in quantity 1",
                    field="cart_items"
                )
            return quantize(artwork.original_price), 1

        if not artwork.prints_available:
            raise ArtworkUnavailableException(
                f"Prints of '{artwork.title}' are not available"
            )
        price = artwork.print_price(item.print_size)
        if price is None:
            raise ValidationException(
                f"Print size {item.print_size} is not offered for '{artwork.title}'",
                field="cart_items"
            )
        if item.quantity > self.max_print_quantity:
            raise ValidationException(
                f"At most {self.max_print_quantity} prints per size",
                field="cart_items"
            )
        return quantize(price), item.quantity

    async def price_cart(self, items: Iterable[CartLineItem]) -> PricedCart:
        """
        Re-price a cart from the catalog

        Raises:
            ValidationException: Empty cart, bad quantity or unknown print size
            NotFoundException: Unknown or archived artwork
            ArtworkUnavailableException: Original sold or prints not offered
        """
        items = merge_lines(items)
        if not items:
            raise ValidationException("Cart is empty", field="cart_items")

        artworks = await self._load_artworks(sorted({item.artwork_id for item in items}))

        lines = []
        for item in items:
            artwork = artworks.get(item.artwork_id)
            if artwork is None:
                raise NotFoundException(f"Artwork {item.artwork_id} not found")

            unit_price, quantity = self._unit_price(artwork, item)
            if quantize(item.unit_price) != unit_price:
                logger.warning(
                    f"Client price {item.unit_price} for {item.id} differs from "
                    f"catalog price {unit_price}; using catalog price"
                )

            lines.append(PricedLine(
                artwork=artwork,
                type=item.type,
                print_size=item.print_size,
                quantity=quantity,
                unit_price=unit_price,
            ))

        return PricedCart(lines=lines, totals=compute_totals(lines, self.policy))
