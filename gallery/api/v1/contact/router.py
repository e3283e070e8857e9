"""
Contact form routes
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.database import get_db
from gallery.core.rate_limit import public_form_limit
from .schemas import ContactCreate, ContactResponse
from .services import ContactService

router = APIRouter()

@router.post(
    "/",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send contact message"
)
@public_form_limit
async def create_contact_message(
    request: Request,
    contact_data: ContactCreate,
    db: AsyncSession = Depends(get_db)
):
    """Submit the contact form"""
    service = ContactService(db)
    message = await service.create_message(contact_data)
    return ContactResponse.model_validate(message)
