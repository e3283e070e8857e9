"""Tests for checkout customer resolution."""

from sqlalchemy import func, select

from gallery.models import Customer
from gallery.services.customer_service import CustomerService

PROFILE = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "phone": "555-0100",
    "city": "Toronto",
}


async def count_customers(session):
    return await session.scalar(select(func.count()).select_from(Customer))


class TestResolveCustomer:
    async def test_creates_customer_with_profile(self, db_session):
        customer = await CustomerService(db_session).resolve_customer("ada@example.com", PROFILE)
        await db_session.commit()

        assert customer.id is not None
        assert customer.email == "ada@example.com"
        assert customer.full_name == "Ada Lovelace"
        assert customer.city == "Toronto"

    async def test_same_email_resolves_to_same_customer(self, db_session):
        service = CustomerService(db_session)
        first = await service.resolve_customer("ada@example.com", PROFILE)
        await db_session.commit()
        second = await service.resolve_customer("ada@example.com", PROFILE)

        assert second.id == first.id
        assert await count_customers(db_session) == 1

    async def test_email_is_trimmed_and_lowercased(self, db_session):
        service = CustomerService(db_session)
        first = await service.resolve_customer("  Ada@Example.COM ", PROFILE)
        await db_session.commit()
        second = await service.resolve_customer("ada@example.com", PROFILE)

        assert first.email == "ada@example.com"
        assert second.id == first.id

    async def test_existing_profile_is_not_overwritten(self, db_session):
        service = CustomerService(db_session)
        await service.resolve_customer("ada@example.com", PROFILE)
        await db_session.commit()

        again = await service.resolve_customer(
            "ada@example.com", {**PROFILE, "first_name": "Augusta", "city": "London"}
        )

        assert again.first_name == "Ada"
        assert again.city == "Toronto"

    async def test_distinct_emails_are_distinct_customers(self, db_session):
        service = CustomerService(db_session)
        ada = await service.resolve_customer("ada@example.com", PROFILE)
        grace = await service.resolve_customer(
            "grace@example.com", {"first_name": "Grace", "last_name": "Hopper"}
        )
        await db_session.commit()

        assert ada.id != grace.id
        assert await count_customers(db_session) == 2


class RacedCustomerService(CustomerService):
    """First lookup misses, as if another checkout inserted the email right after it"""

    def __init__(self, db):
        super().__init__(db)
        self.lookups = 0

    async def get_by_email(self, email):
        self.lookups += 1
        if self.lookups == 1:
            return None
        return await super().get_by_email(email)


class TestConcurrentCreate:
    async def test_duplicate_insert_resolves_to_existing_customer(self, session_factory, db_session):
        async with session_factory() as other:
            winner = Customer(email="ada@example.com", first_name="Ada", last_name="Lovelace")
            other.add(winner)
            await other.commit()
            winner_id = winner.id

        service = RacedCustomerService(db_session)
        customer = await service.resolve_customer("ada@example.com", {**PROFILE, "first_name": "Augusta"})
        await db_session.commit()

        assert service.lookups == 2
        assert customer.id == winner_id
        assert customer.first_name == "Ada"
        assert await count_customers(db_session) == 1
