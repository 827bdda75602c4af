"""Public booking router."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..core.dependencies import get_booking_service, get_trek_service
from ..core.exceptions import NotFoundError, OperationFailedError, ValidationError
from ..schemas.booking import Booking, BookingConfirmation, BookingForm
from ..services.booking_flow import (
    CONFIRMATION_PATH,
    REDIRECT_DELAY_SECONDS,
    BookingSubmission,
    RejectReason,
)
from ..services.bookings import BookingService
from ..services.catalog import TrekService
from ..services.filters import find_by_slug, published_only
from .common import PROBLEM_RESPONSES, model_response, unwrap

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/bookings", tags=["bookings"], responses=PROBLEM_RESPONSES)

FIELD_FOR_REASON = {
    RejectReason.MISSING_DEPARTURE_DATE: "departure_date",
    RejectReason.INVALID_TRAVELERS: "travelers_count",
}


@router.post("/{trek_slug}", response_model=BookingConfirmation, status_code=201)
async def submit_booking(
    trek_slug: str,
    form: BookingForm,
    treks: TrekService = Depends(get_trek_service),
    bookings: BookingService = Depends(get_booking_service),
) -> JSONResponse:
    """
    Submit the public booking form for a published trek.

    The total price is computed here from the stored trek price; the response
    tells the client where to redirect and after how long.
    """
    rows = unwrap(await treks.fetch(), "load_trek")
    submission = BookingSubmission(bookings, find_by_slug(published_only(rows), trek_slug))
    result = await submission.submit(form)

    if not result.ok:
        if submission.reason is RejectReason.TREK_NOT_FOUND:
            raise NotFoundError(resource_type="trek", resource_id=trek_slug)
        field = FIELD_FOR_REASON.get(submission.reason)
        if field is not None:
            raise ValidationError(
                detail=result.error,
                violations=[{"path": field, "message": result.error}],
            )
        raise OperationFailedError(result.error, operation="create_booking")

    confirmation = BookingConfirmation(
        booking=Booking.model_validate(result.data),
        redirect_to=f"{CONFIRMATION_PATH}?booking={result.data.id}",
        redirect_after_seconds=REDIRECT_DELAY_SECONDS,
    )
    return model_response(confirmation, status_code=201)
