"""Admin management endpoints"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.config import settings
from gallery.core.database import get_db
from gallery.core.security import require_admin
from gallery.models import OrderStatus
from gallery.api.v1.orders.schemas import OrderListResponse, OrderResponse, OrderStatusUpdate
from gallery.api.v1.orders.services import OrderService
from gallery.api.v1.contact.schemas import ContactListResponse, ContactResponse
from gallery.api.v1.contact.services import ContactService
from gallery.api.v1.newsletter.schemas import NewsletterListResponse, NewsletterResponse
from gallery.api.v1.newsletter.services import NewsletterService

router = APIRouter(dependencies=[Depends(require_admin)])

@router.get(
    "/orders",
    response_model=OrderListResponse,
    summary="List orders",
    description="Orders newest first, with customer and items"
)
async def list_orders(
    status: Optional[OrderStatus] = None,
    page: int = Query(1, ge=1),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db)
):
    """List all orders"""
    service = OrderService(db)
    result = await service.list_orders(status=status, page=page, size=size)
    return OrderListResponse(
        **{**result, "items": [OrderResponse.model_validate(order) for order in result["items"]]}
    )

@router.patch(
    "/orders/{order_id}/status",
    response_model=OrderResponse,
    summary="Update order status"
)
async def update_order_status(
    order_id: int,
    status_update: OrderStatusUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Move a pending order to completed, cancelled or failed"""
    service = OrderService(db)
    order = await service.update_order_status(order_id, status_update.status)
    return OrderResponse.model_validate(order)

@router.get("/contact-messages", response_model=ContactListResponse)
async def list_contact_messages(
    page: int = Query(1, ge=1),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db)
):
    service = ContactService(db)
    result = await service.list_messages(page=page, size=size)
    return ContactListResponse(
        **{**result, "items": [ContactResponse.model_validate(m) for m in result["items"]]}
    )

@router.delete("/contact-messages/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact_message(
    message_id: int,
    db: AsyncSession = Depends(get_db)
):
    service = ContactService(db)
    await service.delete_message(message_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/newsletter-subscriptions", response_model=NewsletterListResponse)
async def list_newsletter_subscriptions(
    is_active: Optional[bool] = None,
    page: int = Query(1, ge=1),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db)
):
    service = NewsletterService(db)
    result = await service.list_subscriptions(is_active=is_active, page=page, size=size)
    return NewsletterListResponse(
        **{**result, "items": [NewsletterResponse.model_validate(s) for s in result["items"]]}
    )

@router.delete("/newsletter-subscriptions/{email}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_newsletter_subscription(
    email: str,
    db: AsyncSession = Depends(get_db)
):
    service = NewsletterService(db)
    await service.delete_subscription(email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
