"""
Pricing engine
Computes subtotal, shipping and total for a set of line items. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Protocol, Union

from gallery.core.config import settings

CENT = Decimal("0.01")

class PricedLine(Protocol):
    """Anything carrying a unit price, a quantity and a purchase type"""
    unit_price: Union[Decimal, int, float, str]
    quantity: int
    type: str

@dataclass(frozen=True)
class ShippingPolicy:
    """Tiered flat-rate shipping"""
    free_shipping_threshold: Decimal
    original_rate: Decimal
    print_rate: Decimal

    @classmethod
    def from_settings(cls) -> "ShippingPolicy":
        return cls(
            free_shipping_threshold=Decimal(settings.FREE_SHIPPING_THRESHOLD),
            original_rate=Decimal(settings.ORIGINAL_SHIPPING_RATE),
            print_rate=Decimal(settings.PRINT_SHIPPING_RATE),
        )

@dataclass(frozen=True)
class Totals:
    subtotal: Decimal
    shipping_cost: Decimal
    total: Decimal

    def as_dict(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "shipping_cost": self.shipping_cost,
            "total": self.total,
        }

def quantize(amount) -> Decimal:
    """Round a money amount to cents"""
    return Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)

def line_total(unit_price, quantity: int) -> Decimal:
    return quantize(quantize(unit_price) * quantity)

def _type_value(line: PricedLine) -> str:
    return getattr(line.type, "value", line.type)

def compute_shipping(
    subtotal: Decimal,
    has_original: bool,
    policy: ShippingPolicy
) -> Decimal:
    """
    Shipping for an order

    Free at or above the threshold; otherwise the original rate if any
    line is an original, else the print rate.
    """
    if subtotal >= policy.free_shipping_threshold:
        return quantize(0)
    if has_original:
        return quantize(policy.original_rate)
    return quantize(policy.print_rate)

def compute_totals(
    items: Iterable[PricedLine],
    policy: Optional[ShippingPolicy] = None
) -> Totals:
    """
    Compute cart totals

    Args:
        items: Line items (cart or server-priced)
        policy: Shipping policy, defaults to configured values

    Returns:
        Totals where total == subtotal + shipping_cost
    """
    policy = policy or ShippingPolicy.from_settings()
    items = list(items)

    if not items:
        zero = quantize(0)
        return Totals(subtotal=zero, shipping_cost=zero, total=zero)

    subtotal = sum(
        (line_total(item.unit_price, item.quantity) for item in items),
        Decimal("0")
    )
    subtotal = quantize(subtotal)
    has_original = any(_type_value(item) == "original" for item in items)
    shipping_cost = compute_shipping(subtotal, has_original, policy)

    return Totals(
        subtotal=subtotal,
        shipping_cost=shipping_cost,
        total=quantize(subtotal + shipping_cost),
    )

def to_minor_units(amount) -> int:
    """Convert an amount to integer minor units (cents) for the gateway"""
    return int((quantize(amount) * 100).to_integral_value(rounding=ROUND_HALF_UP))
