"""Customer model"""

from sqlalchemy import Column, String, Integer
from sqlalchemy.orm import relationship

from .base import Base, TimestampedModel

class Customer(Base, TimestampedModel):
    """Checkout customer, keyed by normalized email"""

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)

    # Profile
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    phone = Column(String(30), nullable=True)

    # Address
    address = Column(String(500), nullable=True)
    city = Column(String(100), nullable=True)
    zip_code = Column(String(20), nullable=True)
    country = Column(String(100), nullable=True)

    # Relationships
    orders = relationship("Order", back_populates="customer")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
