"""Admin SEO tooling and dashboard."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ...core.dependencies import (
    AdminUser,
    get_blog_service,
    get_booking_service,
    get_contact_service,
    get_media_service,
    get_seo_optimizer,
    get_seo_suggestion_service,
    get_trek_service,
)
from ...schemas.dashboard import DashboardCounts
from ...schemas.seo import SeoOptimizeResponse, SeoRequest, SeoSuggestion
from ...seo.optimizer import SeoOptimizer
from ...services.bookings import BookingService
from ...services.catalog import TrekService
from ...services.contact import ContactSubmissionService
from ...services.content import BlogPostService
from ...services.media import MediaLibraryService
from ...services.seo_suggestion import SeoSuggestionService
from ..common import PROBLEM_RESPONSES, list_response, model_response, unwrap

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/v1/admin",
    tags=["admin"],
    dependencies=[AdminUser],
    responses=PROBLEM_RESPONSES,
)


@router.post("/seo/optimize", response_model=SeoOptimizeResponse)
async def optimize(
    request: SeoRequest,
    optimizer: SeoOptimizer = Depends(get_seo_optimizer),
    suggestions: SeoSuggestionService = Depends(get_seo_suggestion_service),
) -> JSONResponse:
    """
    Generate SEO suggestions for a title and body.

    When ``content_id`` is given the report is also stored for later review.
    """
    report = await optimizer.optimize(request)

    suggestion_id = None
    if request.content_id is not None:
        stored = unwrap(await suggestions.record(request, report), "record_seo_suggestion")
        suggestion_id = stored.id

    return model_response(SeoOptimizeResponse(report=report, suggestion_id=suggestion_id))


@router.get("/seo/suggestions", response_model=list[SeoSuggestion])
async def list_suggestions(
    content_id: Optional[UUID] = Query(None, description="Only suggestions for this trek or post"),
    suggestions: SeoSuggestionService = Depends(get_seo_suggestion_service),
) -> JSONResponse:
    rows = unwrap(await suggestions.fetch(), "list_seo_suggestions")
    if content_id is not None:
        rows = [row for row in rows if row.content_id == content_id]
    return list_response(SeoSuggestion, rows)


@router.post("/seo/suggestions/{suggestion_id}/apply", response_model=SeoSuggestion)
async def apply_suggestion(
    suggestion_id: UUID,
    suggestions: SeoSuggestionService = Depends(get_seo_suggestion_service),
) -> JSONResponse:
    row = unwrap(await suggestions.apply(suggestion_id), "apply_seo_suggestion", "SEO suggestion", suggestion_id)
    return model_response(SeoSuggestion.model_validate(row))


@router.get("/dashboard", response_model=DashboardCounts)
async def dashboard(
    treks: TrekService = Depends(get_trek_service),
    bookings: BookingService = Depends(get_booking_service),
    posts: BlogPostService = Depends(get_blog_service),
    contact: ContactSubmissionService = Depends(get_contact_service),
    media: MediaLibraryService = Depends(get_media_service),
) -> JSONResponse:
    trek_rows = unwrap(await treks.fetch(), "count_treks")
    booking_rows = unwrap(await bookings.fetch(), "count_bookings")
    post_rows = unwrap(await posts.fetch(), "count_posts")
    message_rows = unwrap(await contact.fetch(), "count_messages")
    media_rows = unwrap(await media.fetch(), "count_media")

    counts = DashboardCounts(
        treks=len(trek_rows),
        published_treks=sum(1 for trek in trek_rows if trek.is_published),
        bookings=len(booking_rows),
        pending_bookings=sum(1 for booking in booking_rows if booking.booking_status == "pending"),
        blog_posts=len(post_rows),
        unread_messages=sum(1 for message in message_rows if not message.is_read),
        media_items=len(media_rows),
    )
    return model_response(counts)
