"""Booking-related Pydantic schemas."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class BookingForm(BaseModel):
    """
    Public booking form.

    Departure date and traveler count are checked by the submission flow
    rather than here so rejected forms are counted and reported the same way.
    """

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    phone: str = Field(..., min_length=1, max_length=50)
    country: Optional[str] = Field(None, max_length=100)
    departure_date: Optional[date] = Field(None, description="Requested departure date")
    travelers_count: int = Field(1, description="Number of travelers")
    dietary_requirements: Optional[str] = None
    special_requests: Optional[str] = None


class BookingUpdate(BaseModel):
    """Admin update of a booking; statuses are free text."""

    booking_status: Optional[str] = Field(None, min_length=1, max_length=30)
    payment_status: Optional[str] = Field(None, min_length=1, max_length=30)
    paid_amount: Optional[int] = Field(None, ge=0)
    payment_method: Optional[str] = Field(None, max_length=50)
    departure_date: Optional[date] = None
    travelers_count: Optional[int] = Field(None, gt=0)
    confirmation_sent_at: Optional[datetime] = None
    special_requests: Optional[str] = None


class Booking(BaseModel):
    """Booking response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    trek_id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str
    country: Optional[str] = None
    departure_date: date
    travelers_count: int
    dietary_requirements: Optional[str] = None
    special_requests: Optional[str] = None
    total_price: int
    paid_amount: Optional[int] = None
    payment_method: Optional[str] = None
    payment_status: Optional[str] = None
    booking_status: Optional[str] = None
    confirmation_sent_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class BookingConfirmation(BaseModel):
    """Response to an accepted booking submission."""

    booking: Booking
    redirect_to: str = Field(..., description="Confirmation page path")
    redirect_after_seconds: float = Field(..., description="Delay before the client redirects")
