"""
Contact form and newsletter models
"""

from sqlalchemy import Column, String, Integer, Text, Boolean, DateTime

from .base import Base, TimestampedModel

class ContactMessage(Base, TimestampedModel):
    """Message submitted through the public contact form"""

    __tablename__ = "contact_messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)

class NewsletterSubscription(Base, TimestampedModel):
    """Newsletter subscriber"""

    __tablename__ = "newsletter_subscriptions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    unsubscribed_at = Column(DateTime(timezone=True), nullable=True)
