"""Media library Pydantic schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class MediaUpdate(BaseModel):
    """Editable media metadata."""

    category: Optional[str] = Field(None, max_length=100)
    tags: Optional[list[str]] = None
    alt_text: Optional[str] = Field(None, max_length=500)
    caption: Optional[str] = Field(None, max_length=1000)
    is_public: Optional[bool] = None
    width: Optional[int] = Field(None, gt=0)
    height: Optional[int] = Field(None, gt=0)


class MediaItem(BaseModel):
    """Media library item response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    file_name: str
    file_url: str
    mime_type: Optional[str] = None
    file_size_bytes: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    category: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    alt_text: Optional[str] = None
    caption: Optional[str] = None
    is_public: bool = True
    created_at: datetime
