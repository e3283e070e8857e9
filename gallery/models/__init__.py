"""Models package initialization"""

from .base import Base
from .artwork import Artwork
from .customer import Customer
from .order import Order, OrderItem, OrderStatus, PaymentMethod, PurchaseType
from .contact import ContactMessage, NewsletterSubscription
from .social_media import SocialMediaSetting, SocialPlatform

# Export all models
__all__ = [
    "Base",
    "Artwork",
    "Customer",
    "Order",
    "OrderItem",
    "OrderStatus",
    "PaymentMethod",
    "PurchaseType",
    "ContactMessage",
    "NewsletterSubscription",
    "SocialMediaSetting",
    "SocialPlatform",
]
