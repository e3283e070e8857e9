"""
Newsletter routes
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.database import get_db
from gallery.core.rate_limit import public_form_limit
from .schemas import NewsletterRequest, NewsletterResponse
from .services import NewsletterService

router = APIRouter()

@router.post(
    "/subscribe",
    response_model=NewsletterResponse,
    summary="Subscribe to newsletter"
)
@public_form_limit
async def subscribe(
    request: Request,
    subscription_data: NewsletterRequest,
    db: AsyncSession = Depends(get_db)
):
    """Subscribe an email"""
    service = NewsletterService(db)
    subscription = await service.subscribe(subscription_data.email)
    return NewsletterResponse.model_validate(subscription)

@router.post(
    "/unsubscribe",
    response_model=NewsletterResponse,
    summary="Unsubscribe from newsletter"
)
async def unsubscribe(
    subscription_data: NewsletterRequest,
    db: AsyncSession = Depends(get_db)
):
    """Unsubscribe an email"""
    service = NewsletterService(db)
    subscription = await service.unsubscribe(subscription_data.email)
    return NewsletterResponse.model_validate(subscription)
