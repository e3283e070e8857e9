"""Order models"""

from sqlalchemy import Column, String, Numeric, Integer, Enum, ForeignKey, Index, Text, DateTime, JSON
from sqlalchemy.orm import relationship
import enum

from .base import Base, TimestampedModel

def _enum_values(enum_cls):
    return [member.value for member in enum_cls]

class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"

class PaymentMethod(str, enum.Enum):
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"

class PurchaseType(str, enum.Enum):
    ORIGINAL = "original"
    PRINT = "print"

class Order(Base, TimestampedModel):
    """Customer order; owns its items"""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Order identification
    order_number = Column(String(50), unique=True, nullable=False, index=True)
    idempotency_key = Column(String(255), unique=True, nullable=True, index=True)

    # Parties
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)

    # Status
    status = Column(
        Enum(OrderStatus, name="order_status", values_callable=_enum_values),
        default=OrderStatus.PENDING,
        nullable=False,
        index=True
    )

    # Amounts (total_amount == subtotal + shipping_cost)
    subtotal = Column(Numeric(10, 2), nullable=False)
    shipping_cost = Column(Numeric(10, 2), nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), default="USD", nullable=False)

    # Payment
    payment_method = Column(
        Enum(PaymentMethod, name="payment_method", values_callable=_enum_values),
        nullable=False
    )
    # Card intent id or bank transfer reference; one order per intent
    payment_intent_id = Column(String(255), unique=True, nullable=True, index=True)
    payment_reference = Column(String(255), nullable=True)
    transfer_instructions = Column(JSON, nullable=True)

    # Additional info
    special_instructions = Column(Text, nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    customer = relationship("Customer", back_populates="orders")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderItem.id"
    )

    # Indexes
    __table_args__ = (
        Index("idx_orders_created_status", "created_at", "status"),
    )

class OrderItem(Base, TimestampedModel):
    """Individual line within an order"""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    artwork_id = Column(Integer, ForeignKey("artworks.id"), nullable=False, index=True)

    # Item details (snapshot at time of order)
    artwork_title = Column(String(200), nullable=False)
    type = Column(
        Enum(PurchaseType, name="purchase_type", values_callable=_enum_values),
        nullable=False
    )
    print_size = Column(String(50), nullable=True)

    # Quantities and pricing (total_price == unit_price * quantity)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)

    # Relationships
    order = relationship("Order", back_populates="items")
    artwork = relationship("Artwork", back_populates="order_items")

    __table_args__ = (
        Index("idx_order_items_order_artwork", "order_id", "artwork_id"),
    )
