"""Contact form schemas"""

from pydantic import BaseModel, EmailStr, Field
from datetime import datetime

from gallery.utils.pagination import PaginatedResponse

class ContactCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1, max_length=5000)

class ContactResponse(BaseModel):
    id: int
    name: str
    email: str
    subject: str
    message: str
    created_at: datetime

    class Config:
        from_attributes = True

class ContactListResponse(PaginatedResponse[ContactResponse]):
    pass
