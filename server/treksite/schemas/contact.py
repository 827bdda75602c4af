"""Contact form Pydantic schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .booking import EMAIL_PATTERN


class ContactCreate(BaseModel):
    """Public contact form."""

    full_name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    phone: Optional[str] = Field(None, max_length=50)
    subject: Optional[str] = Field(None, max_length=255)
    message: str = Field(..., min_length=1)


class ContactResponse(BaseModel):
    """Admin reply to a contact submission."""

    response_text: str = Field(..., min_length=1)


class ContactSubmission(ContactCreate):
    """Contact submission response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    is_read: bool
    response_text: Optional[str] = None
    responded_by: Optional[str] = None
    responded_at: Optional[datetime] = None
    created_at: datetime
