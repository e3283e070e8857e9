"""Contact message service"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.exceptions import NotFoundException, ValidationException
from gallery.models import ContactMessage
from gallery.utils.pagination import paginate
from gallery.utils.validators import normalize_email, normalize_text, strip_html
from .schemas import ContactCreate

logger = logging.getLogger(__name__)

def _clean(value: str, field: str, keep_lines: bool = False) -> str:
    cleaned = strip_html(value)
    if keep_lines:
        cleaned = "\n".join(normalize_text(line) for line in cleaned.splitlines()).strip()
    else:
        cleaned = normalize_text(cleaned)
    if not cleaned:
        raise ValidationException(f"{field} cannot be empty", field=field)
    return cleaned

class ContactService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_message(self, data: ContactCreate) -> ContactMessage:
        """Store a contact form submission as plain text"""
        message = ContactMessage(
            name=_clean(data.name, "name"),
            email=normalize_email(data.email),
            subject=_clean(data.subject, "subject"),
            message=_clean(data.message, "message", keep_lines=True),
        )
        self.db.add(message)
        await self.db.commit()
        logger.info(f"Contact message received: {message.id}")
        return message

    async def list_messages(self, page: int = 1, size: int = 20) -> dict:
        query = select(ContactMessage).order_by(
            ContactMessage.created_at.desc(), ContactMessage.id.desc()
        )
        return await paginate(self.db, query, page, size)

    async def delete_message(self, message_id: int) -> None:
        message = await self.db.get(ContactMessage, message_id)
        if not message:
            raise NotFoundException("Contact message not found")
        await self.db.delete(message)
        await self.db.commit()
        logger.info(f"Contact message deleted: {message_id}")
