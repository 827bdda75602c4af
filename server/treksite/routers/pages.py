"""Public informational content: FAQs, team, gallery and site settings."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ..core.dependencies import get_faq_service, get_media_service, get_site_settings, get_team_service
from ..schemas.content import Faq, FaqGroup, TeamMember
from ..schemas.media import MediaItem
from ..schemas.site_settings import SiteSettings
from ..services.content import FaqService, TeamMemberService
from ..services.filters import active_team, filter_gallery, group_faqs
from ..services.media import MediaLibraryService
from .common import PROBLEM_RESPONSES, list_response, model_response, require, unwrap

router = APIRouter(prefix="/v1", tags=["content"], responses=PROBLEM_RESPONSES)


@router.get("/faqs", response_model=list[FaqGroup])
async def list_faqs(faqs: FaqService = Depends(get_faq_service)) -> JSONResponse:
    """Active FAQs grouped by category."""
    rows = unwrap(await faqs.fetch(), "list_faqs")
    groups = [
        FaqGroup(category=category, items=[Faq.model_validate(item) for item in items])
        for category, items in group_faqs(rows)
    ]
    return JSONResponse(status_code=200, content=[group.model_dump(mode="json") for group in groups])


@router.get("/team", response_model=list[TeamMember])
async def list_team(team: TeamMemberService = Depends(get_team_service)) -> JSONResponse:
    rows = unwrap(await team.fetch(), "list_team")
    return list_response(TeamMember, active_team(rows))


@router.get("/gallery", response_model=list[MediaItem])
async def list_gallery(
    region: str = Query("", description="Region/category; empty or 'All' returns everything"),
    media: MediaLibraryService = Depends(get_media_service),
) -> JSONResponse:
    rows = unwrap(await media.fetch(), "list_gallery")
    return list_response(MediaItem, filter_gallery(rows, region))


@router.get("/site-settings", response_model=SiteSettings)
async def site_settings(current: Optional[Any] = Depends(get_site_settings)) -> JSONResponse:
    """Public site configuration: contact details, social links and SEO defaults."""
    row = require(current, "site settings", "current")
    return model_response(SiteSettings.model_validate(row))
