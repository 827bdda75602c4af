"""Trek and itinerary Pydantic schemas."""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class Difficulty(str, Enum):
    """Trek difficulty grade."""
    EASY = "Easy"
    MODERATE = "Moderate"
    CHALLENGING = "Challenging"
    STRENUOUS = "Strenuous"


class TrekFields(BaseModel):
    """Editable trek fields shared by create and read schemas."""

    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(..., min_length=1, max_length=255, description="Trek name")
    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN, description="URL-friendly slug")
    region: Optional[str] = Field(None, max_length=100, description="Trekking region, e.g. Everest")
    short_description: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    duration: Optional[str] = Field(None, max_length=50, description="Free text such as '14 Days'")
    max_altitude: Optional[str] = Field(None, max_length=50)
    best_seasons: list[str] = Field(default_factory=list)
    price: Optional[int] = Field(None, ge=0, description="Price per person in whole currency units")
    rating: Optional[float] = Field(None, ge=0, le=5)
    review_count: int = Field(0, ge=0)
    highlights: list[str] = Field(default_factory=list)
    includes: list[str] = Field(default_factory=list)
    excludes: list[str] = Field(default_factory=list)
    gallery_images: list[str] = Field(default_factory=list)
    featured_image_url: Optional[str] = None
    is_published: bool = False
    is_featured: bool = False
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = Field(None, max_length=500)
    seo_keywords: list[str] = Field(default_factory=list)
    long_tail_keywords: list[str] = Field(default_factory=list)


class TrekCreate(TrekFields):
    """Request schema for creating a trek."""


class TrekUpdate(BaseModel):
    """Request schema for a partial trek update; omitted fields are left unchanged."""

    model_config = ConfigDict(use_enum_values=True)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    region: Optional[str] = Field(None, max_length=100)
    short_description: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    duration: Optional[str] = Field(None, max_length=50)
    max_altitude: Optional[str] = Field(None, max_length=50)
    best_seasons: Optional[list[str]] = None
    price: Optional[int] = Field(None, ge=0)
    rating: Optional[float] = Field(None, ge=0, le=5)
    review_count: Optional[int] = Field(None, ge=0)
    highlights: Optional[list[str]] = None
    includes: Optional[list[str]] = None
    excludes: Optional[list[str]] = None
    gallery_images: Optional[list[str]] = None
    featured_image_url: Optional[str] = None
    is_published: Optional[bool] = None
    is_featured: Optional[bool] = None
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = Field(None, max_length=500)
    seo_keywords: Optional[list[str]] = None
    long_tail_keywords: Optional[list[str]] = None


class Trek(TrekFields):
    """Trek response schema."""

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    id: UUID
    # Stored rows may predate slug/difficulty validation
    slug: str
    difficulty: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ItineraryDayCreate(BaseModel):
    """Request schema for adding one itinerary day."""

    day_number: int = Field(..., gt=0, description="1-based day number")
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    altitude: Optional[str] = Field(None, max_length=50)
    distance: Optional[str] = Field(None, max_length=50)
    activities: list[str] = Field(default_factory=list)


class ItineraryDayUpdate(BaseModel):
    """Request schema for a partial itinerary day update."""

    day_number: Optional[int] = Field(None, gt=0)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    altitude: Optional[str] = Field(None, max_length=50)
    distance: Optional[str] = Field(None, max_length=50)
    activities: Optional[list[str]] = None


class ItineraryDay(ItineraryDayCreate):
    """Itinerary day response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    trek_id: UUID


class TrekDetail(Trek):
    """Trek with its ordered itinerary."""

    itinerary: list[ItineraryDay] = Field(default_factory=list)
