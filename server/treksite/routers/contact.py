"""Public contact form router."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..core.dependencies import get_contact_service
from ..schemas.contact import ContactCreate, ContactSubmission
from ..services.contact import ContactSubmissionService
from .common import PROBLEM_RESPONSES, model_response, unwrap

router = APIRouter(prefix="/v1/contact", tags=["contact"], responses=PROBLEM_RESPONSES)


@router.post("", response_model=ContactSubmission, status_code=201)
async def submit_contact(
    message: ContactCreate,
    contact: ContactSubmissionService = Depends(get_contact_service),
) -> JSONResponse:
    row = unwrap(await contact.submit(message.model_dump()), "submit_contact")
    return model_response(ContactSubmission.model_validate(row), status_code=201)
