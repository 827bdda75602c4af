"""Admin handling of bookings and contact submissions."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...core.dependencies import AdminUser, get_booking_service, get_contact_service
from ...schemas.booking import Booking, BookingUpdate
from ...schemas.common import DeleteResult
from ...schemas.contact import ContactResponse, ContactSubmission
from ...services.bookings import BookingService
from ...services.contact import ContactSubmissionService
from ..common import PROBLEM_RESPONSES, list_response, model_response, require, unwrap

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/admin", tags=["admin"], responses=PROBLEM_RESPONSES)


@router.get("/bookings", response_model=list[Booking], dependencies=[AdminUser])
async def list_bookings(bookings: BookingService = Depends(get_booking_service)) -> JSONResponse:
    rows = unwrap(await bookings.fetch(), "list_bookings")
    return list_response(Booking, rows)


@router.patch("/bookings/{booking_id}", response_model=Booking, dependencies=[AdminUser])
async def update_booking(
    booking_id: UUID,
    payload: BookingUpdate,
    bookings: BookingService = Depends(get_booking_service),
) -> JSONResponse:
    """Change statuses or payment details. Statuses are free text."""
    row = unwrap(
        await bookings.update(booking_id, payload.model_dump(exclude_unset=True)),
        "update_booking",
        "booking",
        booking_id,
    )
    return model_response(Booking.model_validate(row))


@router.delete("/bookings/{booking_id}", response_model=DeleteResult, dependencies=[AdminUser])
async def delete_booking(
    booking_id: UUID,
    bookings: BookingService = Depends(get_booking_service),
) -> JSONResponse:
    removed = unwrap(await bookings.delete(booking_id), "delete_booking")
    require(removed or None, "booking", booking_id)
    logger.info("Booking deleted by admin", extra={"booking_id": str(booking_id)})
    return model_response(DeleteResult(id=str(booking_id)))


@router.get("/contact", response_model=list[ContactSubmission], dependencies=[AdminUser])
async def list_contact_submissions(
    contact: ContactSubmissionService = Depends(get_contact_service),
) -> JSONResponse:
    rows = unwrap(await contact.fetch(), "list_contact_submissions")
    return list_response(ContactSubmission, rows)


@router.post("/contact/{submission_id}/read", response_model=ContactSubmission, dependencies=[AdminUser])
async def mark_contact_read(
    submission_id: UUID,
    contact: ContactSubmissionService = Depends(get_contact_service),
) -> JSONResponse:
    row = unwrap(
        await contact.mark_as_read(submission_id), "mark_contact_read", "contact submission", submission_id
    )
    return model_response(ContactSubmission.model_validate(row))


@router.post("/contact/{submission_id}/respond", response_model=ContactSubmission)
async def respond_to_contact(
    submission_id: UUID,
    payload: ContactResponse,
    user: dict = AdminUser,
    contact: ContactSubmissionService = Depends(get_contact_service),
) -> JSONResponse:
    responder = user.get("email") or user.get("username") or user["user_id"]
    row = unwrap(
        await contact.respond(submission_id, payload.response_text, responder),
        "respond_to_contact",
        "contact submission",
        submission_id,
    )
    return model_response(ContactSubmission.model_validate(row))


@router.delete("/contact/{submission_id}", response_model=DeleteResult, dependencies=[AdminUser])
async def delete_contact_submission(
    submission_id: UUID,
    contact: ContactSubmissionService = Depends(get_contact_service),
) -> JSONResponse:
    removed = unwrap(await contact.delete(submission_id), "delete_contact_submission")
    require(removed or None, "contact submission", submission_id)
    return model_response(DeleteResult(id=str(submission_id)))
