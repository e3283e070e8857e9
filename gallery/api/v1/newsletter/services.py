"""Newsletter subscription service"""

from typing import Optional
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.exceptions import NotFoundException
from gallery.models import NewsletterSubscription
from gallery.models.base import utcnow
from gallery.utils.pagination import paginate
from gallery.utils.validators import normalize_email

logger = logging.getLogger(__name__)

class NewsletterService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> Optional[NewsletterSubscription]:
        result = await self.db.execute(
            select(NewsletterSubscription).where(
                NewsletterSubscription.email == normalize_email(email)
            )
        )
        return result.scalar_one_or_none()

    async def subscribe(self, email: str) -> NewsletterSubscription:
        """
        Subscribe an email

        Subscribing twice is harmless; an unsubscribed email is reactivated.
        """
        email = normalize_email(email)
        subscription = await self.get_by_email(email)

        if subscription is None:
            subscription = NewsletterSubscription(email=email, is_active=True)
            self.db.add(subscription)
            try:
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                subscription = await self.get_by_email(email)
            logger.info(f"Newsletter subscription created for {email}")
            return subscription

        if not subscription.is_active:
            subscription.is_active = True
            subscription.unsubscribed_at = None
            await self.db.commit()
            logger.info(f"Newsletter subscription reactivated for {email}")

        return subscription

    async def unsubscribe(self, email: str) -> NewsletterSubscription:
        subscription = await self.get_by_email(email)
        if subscription is None:
            raise NotFoundException("Subscription not found")

        if subscription.is_active:
            subscription.is_active = False
            subscription.unsubscribed_at = utcnow()
            await self.db.commit()
            logger.info(f"Newsletter unsubscribed: {subscription.email}")

        return subscription

    async def list_subscriptions(
        self,
        is_active: Optional[bool] = None,
        page: int = 1,
        size: int = 20
    ) -> dict:
        query = select(NewsletterSubscription).order_by(
            NewsletterSubscription.created_at.desc(), NewsletterSubscription.id.desc()
        )
        if is_active is not None:
            query = query.where(NewsletterSubscription.is_active == is_active)
        return await paginate(self.db, query, page, size)

    async def delete_subscription(self, email: str) -> None:
        subscription = await self.get_by_email(email)
        if subscription is None:
            raise NotFoundException("Subscription not found")
        await self.db.delete(subscription)
        await self.db.commit()
        logger.info(f"Newsletter subscription deleted: {subscription.email}")
