"""
Bank (e-)transfer instructions
Manual payment path: the customer sends funds out of band and an admin
marks the order completed once received.
"""

from typing import Any, Dict, Optional

from gallery.core.config import settings
from gallery.models import Order
from gallery.utils.helpers import generate_reference

SECURITY_QUESTION = "What is your order number?"

class BankTransferGateway:
    """Builds transfer instructions keyed to an order"""

    def __init__(
        self,
        recipient_email: Optional[str] = None,
        recipient_name: Optional[str] = None
    ):
        self.recipient_email = recipient_email or settings.BANK_TRANSFER_RECIPIENT_EMAIL
        self.recipient_name = recipient_name or settings.BANK_TRANSFER_RECIPIENT_NAME

    def create_instructions(self, order: Order) -> Dict[str, Any]:
        """
        Transfer instructions for a persisted order

        Returns:
            Instructions including a unique transfer reference
        """
        return {
            "transfer_reference": generate_reference("ETR", order.id),
            "recipient_email": self.recipient_email,
            "recipient_name": self.recipient_name,
            "amount": str(order.total_amount),
            "currency": order.currency,
            "security_question": SECURITY_QUESTION,
            "security_answer": order.order_number,
            "memo": f"Art Gallery Order #{order.order_number}",
        }
