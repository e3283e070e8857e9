"""Artwork model using base mixins"""

from sqlalchemy import Column, String, Text, Numeric, Integer, Boolean, JSON, Index
from sqlalchemy.orm import relationship

from .base import Base, TimestampedModel, SoftDeleteModel, SluggedModel

class Artwork(Base, TimestampedModel, SoftDeleteModel, SluggedModel):
    """Catalog artwork with original and print sale options"""

    __tablename__ = "artworks"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Basic info
    title = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)
    year = Column(Integer, nullable=False)
    medium = Column(String(200), nullable=False)
    original_dimensions = Column(String(100), nullable=False)

    # Original
    original_price = Column(Numeric(10, 2), nullable=True)
    original_available = Column(Boolean, default=False, nullable=False)
    original_sold = Column(Boolean, default=False, nullable=False)

    # Prints
    prints_available = Column(Boolean, default=False, nullable=False)
    print_options = Column(JSON, default=list, nullable=False)  # [{size, price}]

    # Media
    images = Column(JSON, default=list, nullable=False)  # ordered URLs

    # Display
    display_order = Column(Integer, default=0, nullable=False)

    # Relationships
    order_items = relationship("OrderItem", back_populates="artwork", passive_deletes=True)

    # Indexes
    __table_args__ = (
        Index("idx_artworks_display_order", "display_order", "id"),
    )

    @property
    def is_original_for_sale(self) -> bool:
        return bool(
            self.original_available
            and not self.original_sold
            and self.original_price is not None
        )

    def print_price(self, size: str):
        """Price of the print option with the given size, or None"""
        for option in self.print_options or []:
            if option.get("size") == size:
                return option.get("price")
        return None

    def mark_original_sold(self):
        self.original_sold = True
        self.original_available = False
