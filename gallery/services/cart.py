"""
Client-held shopping cart
The cart lives in a key-value store on the client (browser local storage);
this module defines its schema and merge rules so the same logic can run and
be tested anywhere.
"""

from typing import List, Optional, Protocol
from decimal import Decimal
import json
import logging

from pydantic import BaseModel, Field, ValidationError, computed_field, model_validator

from gallery.core.config import settings
from gallery.models.order import PurchaseType
from .pricing import ShippingPolicy, Totals, compute_totals

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "cart"

class CartLineItem(BaseModel):
    """One cart line; at most one per (artwork, type, print size)"""
    artwork_id: int = Field(..., gt=0)
    type: PurchaseType
    print_size: Optional[str] = Field(None, max_length=50)
    quantity: int = Field(1, ge=1)
    unit_price: Decimal = Field(..., ge=0)
    title: Optional[str] = Field(None, max_length=200)
    image: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def check_print_size(self):
        if self.type == PurchaseType.PRINT and not self.print_size:
            raise ValueError("print_size is required for prints")
        if self.type == PurchaseType.ORIGINAL:
            self.print_size = None
        return self

    @computed_field
    @property
    def id(self) -> str:
        return f"{self.artwork_id}-{self.type.value}-{self.print_size or 'original'}"

class KeyValueStorage(Protocol):
    """Minimal string key-value store"""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...

class InMemoryStorage:
    """Dict-backed KeyValueStorage"""

    def __init__(self, initial: Optional[dict] = None):
        self._data = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

class CartRepository:
    """Cart operations over a KeyValueStorage"""

    def __init__(
        self,
        storage: KeyValueStorage,
        max_print_quantity: Optional[int] = None,
        key: str = CART_STORAGE_KEY
    ):
        self.storage = storage
        self.max_print_quantity = max_print_quantity or settings.MAX_PRINT_QUANTITY
        self.key = key

    def _clamp(self, item_type: PurchaseType, quantity: int) -> int:
        if item_type == PurchaseType.ORIGINAL:
            return 1
        return max(1, min(quantity, self.max_print_quantity))

    def get_cart(self) -> List[CartLineItem]:
        """
        Load the cart

        A missing, empty or unparseable value is an empty cart. Entries that
        fail validation are dropped.
        """
        raw = self.storage.get(self.key)
        if not raw:
            return []

        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Discarding unreadable cart data")
            return []

        if not isinstance(data, list):
            return []

        items = []
        for entry in data:
            try:
                items.append(CartLineItem.model_validate(entry))
            except ValidationError:
                logger.warning(f"Dropping invalid cart entry: {entry!r}")
        return items

    def set_cart(self, items: List[CartLineItem]) -> None:
        payload = [item.model_dump(mode="json") for item in items]
        self.storage.set(self.key, json.dumps(payload))

    def add_item(self, item: CartLineItem) -> List[CartLineItem]:
        """
        Add a line, merging with an existing line for the same
        artwork, type and size

        Originals stay at quantity 1; adding one already in the cart does
        nothing. Print quantities add up and are capped.
        """
        cart = self.get_cart()
        quantity = self._clamp(item.type, item.quantity)

        for existing in cart:
            if existing.id == item.id:
                if existing.type == PurchaseType.PRINT:
                    existing.quantity = self._clamp(
                        existing.type, existing.quantity + quantity
                    )
                    self.set_cart(cart)
                return cart

        cart.append(item.model_copy(update={"quantity": quantity}))
        self.set_cart(cart)
        return cart

    def remove_item(self, item_id: str) -> List[CartLineItem]:
        cart = [item for item in self.get_cart() if item.id != item_id]
        self.set_cart(cart)
        return cart

    def update_quantity(self, item_id: str, quantity: int) -> List[CartLineItem]:
        """Set a line's quantity; values below 1 are ignored"""
        cart = self.get_cart()
        if quantity < 1:
            return cart

        for item in cart:
            if item.id == item_id:
                item.quantity = self._clamp(item.type, quantity)
                self.set_cart(cart)
                break
        return cart

    def clear(self) -> None:
        self.storage.delete(self.key)

    def item_count(self) -> int:
        return sum(item.quantity for item in self.get_cart())

    def totals(self, policy: Optional[ShippingPolicy] = None) -> Totals:
        return compute_totals(self.get_cart(), policy)
