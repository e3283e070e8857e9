import hashlib
import hmac
import itertools
import os
from decimal import Decimal

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ALLOWED_HOSTS", '["*"]')
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("RAZORPAY_KEY_ID", "rzp_test_key")
os.environ.setdefault("RAZORPAY_KEY_SECRET", "rzp_test_secret")
os.environ.setdefault("RAZORPAY_WEBHOOK_SECRET", "rzp_webhook_secret")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from gallery.api.v1.payments.dependencies import get_payment_gateway
from gallery.api.v1.payments.gateway import IntentStatus, PaymentConfirmation, PaymentIntent
from gallery.core.database import get_db
from gallery.core.exceptions import InvalidPaymentException, PaymentGatewayException
from gallery.core.security import SecurityUtils
from gallery.main import app
from gallery.models import Artwork, Base


class FakeGateway:
    """In-memory payment processor"""

    public_key = "rzp_test_fake"

    def __init__(self, webhook_secret="fake-webhook-secret"):
        self.webhook_secret = webhook_secret
        self.intents = {}
        self.payments = {}
        self.fail = False
        self._ids = itertools.count(1)

    def _check_up(self):
        if self.fail:
            raise PaymentGatewayException("Payment processor error: connection refused")

    async def create_intent(self, amount, currency, receipt=None, notes=None):
        self._check_up()
        intent_id = f"order_fake{next(self._ids):04d}"
        self.intents[intent_id] = IntentStatus(
            intent_id=intent_id, status="created", amount=amount, currency=currency
        )
        return PaymentIntent(intent_id=intent_id, amount=amount, currency=currency, status="created")

    def signature_for(self, intent_id, payment_id):
        return f"sig:{intent_id}|{payment_id}"

    def pay(self, intent_id, amount=None):
        """Simulate the customer paying at checkout; returns (payment_id, signature)"""
        payment_id = f"pay_fake{next(self._ids):04d}"
        self.payments[payment_id] = {
            "intent_id": intent_id,
            "amount": self.intents[intent_id].amount if amount is None else amount,
        }
        return payment_id, self.signature_for(intent_id, payment_id)

    def mark_paid(self, intent_id):
        intent = self.intents[intent_id]
        intent.status = "paid"
        intent.amount_paid = intent.amount

    async def confirm_payment(self, intent_id, payment_id, signature, expected_amount):
        self._check_up()
        if signature != self.signature_for(intent_id, payment_id):
            raise InvalidPaymentException("Invalid payment signature")
        payment = self.payments.get(payment_id)
        if payment is None or payment["intent_id"] != intent_id:
            raise InvalidPaymentException("Payment does not belong to this payment intent")
        if payment["amount"] != expected_amount:
            raise InvalidPaymentException("Payment amount does not match order total")
        self.mark_paid(intent_id)
        return PaymentConfirmation(
            payment_id=payment_id,
            intent_id=intent_id,
            amount=payment["amount"],
            status="captured",
        )

    async def get_intent_status(self, intent_id):
        self._check_up()
        if intent_id not in self.intents:
            raise InvalidPaymentException("Payment rejected: unknown order id")
        return self.intents[intent_id]

    def sign_webhook(self, body: bytes) -> str:
        return hmac.new(self.webhook_secret.encode(), body, hashlib.sha256).hexdigest()

    def verify_webhook_signature(self, body, signature):
        return hmac.compare_digest(self.sign_webhook(body), signature or "")


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'gallery.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
async def client(session_factory, gateway):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_gateway] = lambda: gateway

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as async_client:
        yield async_client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    token = SecurityUtils.create_access_token({"sub": "admin-1", "role": "admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer_headers():
    token = SecurityUtils.create_access_token({"sub": "user-1", "role": "customer"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def create_artwork(session_factory):
    """Insert an artwork directly; defaults offer the original at 90 and prints"""
    counter = itertools.count(1)

    async def _create(**overrides):
        n = next(counter)
        values = {
            "title": f"Artwork {n}",
            "slug": f"artwork-{n}",
            "year": 2020,
            "medium": "Oil on canvas",
            "original_dimensions": "24x36 in",
            "original_price": Decimal("90.00"),
            "original_available": True,
            "original_sold": False,
            "prints_available": True,
            "print_options": [
                {"size": "8x10", "price": "20.00"},
                {"size": "16x20", "price": "60.00"},
            ],
            "images": [f"https://img.example/{n}.jpg"],
            "display_order": n,
        }
        values.update(overrides)
        async with session_factory() as session:
            artwork = Artwork(**values)
            session.add(artwork)
            await session.commit()
            return artwork

    return _create


@pytest.fixture
def customer_data():
    return {
        "email": "Ada@Example.com",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "phone": "555-0100",
        "address": "12 Gallery Row",
        "city": "Toronto",
        "zip_code": "M5V 2T6",
        "country": "Canada",
    }
