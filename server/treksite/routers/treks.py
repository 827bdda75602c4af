"""Public trek catalog router."""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ..core.dependencies import get_backend, get_cache, get_trek_service
from ..core.backend import TableClient
from ..schemas.trek import ItineraryDay, Trek, TrekDetail
from ..services.cache import QueryCache
from ..services.catalog import TrekService, load_itinerary
from ..services.filters import TrekFilter, filter_treks, find_by_slug, published_only
from .common import PROBLEM_RESPONSES, list_response, model_response, require, unwrap

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/treks", tags=["treks"], responses=PROBLEM_RESPONSES)


@router.get("", response_model=list[Trek])
async def list_treks(
    search: str = Query("", description="Substring matched against name, region and descriptions"),
    region: str = Query("", description="Exact region, case-insensitive"),
    difficulty: str = Query("", description="Exact difficulty, case-insensitive"),
    sort: str = Query("popular", description="popular, price-low, price-high, rating or duration"),
    treks: TrekService = Depends(get_trek_service),
) -> JSONResponse:
    """List published treks, filtered and sorted."""
    rows = unwrap(await treks.fetch(), "list_treks")
    criteria = TrekFilter(search=search, region=region, difficulty=difficulty, sort=sort)
    return list_response(Trek, filter_treks(published_only(rows), criteria))


@router.get("/{slug}", response_model=TrekDetail)
async def get_trek(
    slug: str,
    treks: TrekService = Depends(get_trek_service),
    backend: TableClient = Depends(get_backend),
    cache: QueryCache = Depends(get_cache),
) -> JSONResponse:
    """Published trek with its day-by-day itinerary."""
    rows = unwrap(await treks.fetch(), "get_trek")
    trek = require(find_by_slug(published_only(rows), slug), "trek", slug)

    days = unwrap(await load_itinerary(backend, cache, trek.id), "get_itinerary")
    detail = TrekDetail(
        **Trek.model_validate(trek).model_dump(),
        itinerary=[ItineraryDay.model_validate(day) for day in days],
    )
    return model_response(detail)
