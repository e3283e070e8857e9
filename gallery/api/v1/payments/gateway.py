"""
Payment gateway contract
Amounts crossing this boundary are integer minor units (cents).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

@dataclass
class PaymentIntent:
    """Processor-side handle for an in-progress charge"""
    intent_id: str
    amount: int
    currency: str
    status: str

@dataclass
class IntentStatus:
    intent_id: str
    status: str
    amount: int
    amount_paid: int = 0
    currency: Optional[str] = None

    @property
    def is_paid(self) -> bool:
        return self.status == "paid" or (self.amount > 0 and self.amount_paid >= self.amount)

@dataclass
class PaymentConfirmation:
    payment_id: str
    intent_id: str
    amount: int
    status: str
    raw: Dict[str, Any] = field(default_factory=dict)

class PaymentGateway(Protocol):
    """External payment processor"""

    async def create_intent(
        self,
        amount: int,
        currency: str,
        receipt: Optional[str] = None,
        notes: Optional[Dict[str, Any]] = None
    ) -> PaymentIntent: ...

    async def confirm_payment(
        self,
        intent_id: str,
        payment_id: str,
        signature: str,
        expected_amount: int
    ) -> PaymentConfirmation: ...

    async def get_intent_status(self, intent_id: str) -> IntentStatus: ...

    def verify_webhook_signature(self, body: bytes, signature: str) -> bool: ...

    @property
    def public_key(self) -> Optional[str]: ...
