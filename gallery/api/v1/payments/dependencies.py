"""Payment gateway dependencies"""

from functools import lru_cache

from .bank_transfer import BankTransferGateway
from .gateway import PaymentGateway
from .razorpay_client import RazorpayGateway

@lru_cache()
def _razorpay_gateway() -> RazorpayGateway:
    return RazorpayGateway()

def get_payment_gateway() -> PaymentGateway:
    """Card payment processor"""
    return _razorpay_gateway()

def get_bank_transfer_gateway() -> BankTransferGateway:
    return BankTransferGateway()
