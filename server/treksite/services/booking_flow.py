"""Booking submission flow: form checks, server-side pricing and one create call."""

import logging
from enum import Enum
from typing import Any, Optional

from ..core.observability import metrics_collector
from ..schemas.booking import BookingForm
from .base import Result
from .bookings import BookingService

logger = logging.getLogger(__name__)

REDIRECT_DELAY_SECONDS = 2.0
CONFIRMATION_PATH = "/booking-confirmation"
INITIAL_STATUS = "pending"


class SubmissionState(str, Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"


class RejectReason(str, Enum):
    TREK_NOT_FOUND = "trek_not_found"
    MISSING_DEPARTURE_DATE = "missing_departure_date"
    INVALID_TRAVELERS = "invalid_travelers"
    ALREADY_SUBMITTING = "already_submitting"
    ALREADY_SUBMITTED = "already_submitted"
    BACKEND_ERROR = "backend_error"


REJECT_MESSAGES = {
    RejectReason.TREK_NOT_FOUND: "Trek not found",
    RejectReason.MISSING_DEPARTURE_DATE: "Please select a departure date",
    RejectReason.INVALID_TRAVELERS: "At least one traveler is required",
    RejectReason.ALREADY_SUBMITTING: "A booking submission is already in progress",
    RejectReason.ALREADY_SUBMITTED: "This booking has already been submitted",
}


def booking_total(price: Optional[int], travelers_count: int) -> int:
    """Price per person times travelers; a trek without a price costs 0."""
    return (price or 0) * travelers_count


class BookingSubmission:
    """
    One booking form moving through editing -> submitting -> submitted.

    All checks run before the backend is called. A backend failure returns the
    form to editing with the error message; a success is terminal.
    """

    def __init__(self, bookings: BookingService, trek: Optional[Any]):
        self.bookings = bookings
        self.trek = trek
        self.state = SubmissionState.EDITING
        self.error: Optional[str] = None
        self.reason: Optional[RejectReason] = None
        self.booking: Optional[Any] = None

    def check(self, form: BookingForm) -> Optional[RejectReason]:
        if self.state is SubmissionState.SUBMITTING:
            return RejectReason.ALREADY_SUBMITTING
        if self.state is SubmissionState.SUBMITTED:
            return RejectReason.ALREADY_SUBMITTED
        if self.trek is None:
            return RejectReason.TREK_NOT_FOUND
        if form.departure_date is None:
            return RejectReason.MISSING_DEPARTURE_DATE
        if form.travelers_count < 1:
            return RejectReason.INVALID_TRAVELERS
        return None

    def _reject(self, reason: RejectReason, message: str) -> Result[Any]:
        self.reason = reason
        self.error = message
        metrics_collector.record_booking_rejected(reason.value)
        logger.info(
            "Booking submission rejected",
            extra={"reason": reason.value, "trek_slug": getattr(self.trek, "slug", None)}
        )
        return Result(error=message)

    async def submit(self, form: BookingForm) -> Result[Any]:
        reason = self.check(form)
        if reason is not None:
            return self._reject(reason, REJECT_MESSAGES[reason])

        self.state = SubmissionState.SUBMITTING
        self.error = None
        self.reason = None

        values = form.model_dump()
        values.update({
            "trek_id": self.trek.id,
            "total_price": booking_total(self.trek.price, form.travelers_count),
            "booking_status": INITIAL_STATUS,
            "payment_status": INITIAL_STATUS,
        })

        try:
            result = await self.bookings.create(values)
        except BaseException:
            self.state = SubmissionState.EDITING
            raise

        if not result.ok:
            self.state = SubmissionState.EDITING
            return self._reject(RejectReason.BACKEND_ERROR, result.error or "Failed to create booking")

        self.state = SubmissionState.SUBMITTED
        self.booking = result.data
        metrics_collector.record_booking_submitted(self.trek.slug)
        logger.info(
            "Booking submitted",
            extra={
                "booking_id": str(result.data.id),
                "trek_slug": self.trek.slug,
                "travelers": form.travelers_count,
                "total_price": result.data.total_price,
            }
        )
        return result
