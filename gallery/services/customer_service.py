"""Customer resolution for checkout"""

from typing import Any, Dict, Optional
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.exceptions import PersistenceException
from gallery.models import Customer
from gallery.utils.validators import normalize_email

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "phone",
    "address",
    "city",
    "zip_code",
    "country",
)

class CustomerService:
    """Find-or-create customers by email"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> Optional[Customer]:
        result = await self.db.execute(
            select(Customer).where(Customer.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def resolve_customer(self, email: str, profile: Dict[str, Any]) -> Customer:
        """
        Return the customer for an email, creating it if needed

        An existing customer is returned unchanged; profile fields from the
        checkout form never overwrite stored ones. Safe to call repeatedly
        and concurrently for the same email.

        Args:
            email: Customer email (trimmed and lowercased for lookup)
            profile: Profile fields used only when creating

        Returns:
            Customer
        """
        normalized = normalize_email(email)

        customer = await self.get_by_email(normalized)
        if customer is not None:
            logger.debug(f"Reusing customer {customer.id} for {normalized}")
            return customer

        customer = Customer(
            email=normalized,
            **{field: profile.get(field) for field in PROFILE_FIELDS}
        )

        try:
            async with self.db.begin_nested():
                self.db.add(customer)
        except IntegrityError:
            # Another checkout created this email first
            logger.info(f"Customer insert raced for {normalized}; reusing existing row")
            customer = await self.get_by_email(normalized)
            if customer is None:
                raise PersistenceException("Could not resolve customer")
            return customer

        logger.info(f"Created customer {customer.id} for {normalized}")
        return customer
