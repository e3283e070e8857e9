"""Newsletter schemas"""

from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime

from gallery.utils.pagination import PaginatedResponse

class NewsletterRequest(BaseModel):
    email: EmailStr

class NewsletterResponse(BaseModel):
    email: str
    is_active: bool
    created_at: datetime
    unsubscribed_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class NewsletterListResponse(PaginatedResponse[NewsletterResponse]):
    pass
