"""Admin management of treks, itineraries, blog posts, FAQs and team members."""

from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...core.backend import TableClient
from ...core.dependencies import (
    AdminUser,
    get_backend,
    get_blog_service,
    get_cache,
    get_faq_service,
    get_team_service,
    get_trek_service,
)
from ...schemas.common import DeleteResult
from ...schemas.content import (
    BlogPost,
    BlogPostCreate,
    BlogPostUpdate,
    Faq,
    FaqCreate,
    FaqUpdate,
    TeamMember,
    TeamMemberCreate,
    TeamMemberUpdate,
)
from ...schemas.trek import ItineraryDay, ItineraryDayCreate, ItineraryDayUpdate, Trek, TrekCreate, TrekUpdate
from ...services.cache import QueryCache
from ...services.catalog import ItineraryService, TrekService
from ..common import PROBLEM_RESPONSES, list_response, model_response, require, unwrap
from .crud import add_crud_routes

router = APIRouter(
    prefix="/v1/admin",
    tags=["admin"],
    dependencies=[AdminUser],
    responses=PROBLEM_RESPONSES,
)

add_crud_routes(router, "/treks", "trek", get_trek_service, Trek, TrekCreate, TrekUpdate)
add_crud_routes(router, "/blog", "blog post", get_blog_service, BlogPost, BlogPostCreate, BlogPostUpdate)
add_crud_routes(router, "/faqs", "faq", get_faq_service, Faq, FaqCreate, FaqUpdate)
add_crud_routes(router, "/team", "team member", get_team_service, TeamMember, TeamMemberCreate, TeamMemberUpdate)


async def get_itinerary_service(
    trek_id: UUID,
    treks: TrekService = Depends(get_trek_service),
    backend: TableClient = Depends(get_backend),
    cache: QueryCache = Depends(get_cache),
) -> ItineraryService:
    """Itinerary service for an existing trek."""
    require(unwrap(await treks.get(trek_id), "get_trek"), "trek", trek_id)
    return ItineraryService(backend, cache, trek_id)


@router.get("/treks/{trek_id}/itinerary", response_model=list[ItineraryDay])
async def list_itinerary(itinerary: ItineraryService = Depends(get_itinerary_service)) -> JSONResponse:
    rows = unwrap(await itinerary.fetch(), "list_itinerary")
    return list_response(ItineraryDay, rows)


@router.post("/treks/{trek_id}/itinerary", response_model=ItineraryDay, status_code=201)
async def add_itinerary_day(
    payload: ItineraryDayCreate,
    itinerary: ItineraryService = Depends(get_itinerary_service),
) -> JSONResponse:
    row = unwrap(await itinerary.create(payload.model_dump()), "create_itinerary_day")
    return model_response(ItineraryDay.model_validate(row), status_code=201)


@router.patch("/treks/{trek_id}/itinerary/{day_id}", response_model=ItineraryDay)
async def update_itinerary_day(
    day_id: UUID,
    payload: ItineraryDayUpdate,
    itinerary: ItineraryService = Depends(get_itinerary_service),
) -> JSONResponse:
    require(unwrap(await itinerary.get(day_id), "get_itinerary_day"), "itinerary day", day_id)
    row = unwrap(
        await itinerary.update(day_id, payload.model_dump(exclude_unset=True)),
        "update_itinerary_day",
        "itinerary day",
        day_id,
    )
    return model_response(ItineraryDay.model_validate(row))


@router.delete("/treks/{trek_id}/itinerary/{day_id}", response_model=DeleteResult)
async def delete_itinerary_day(
    day_id: UUID,
    itinerary: ItineraryService = Depends(get_itinerary_service),
) -> JSONResponse:
    require(unwrap(await itinerary.get(day_id), "get_itinerary_day"), "itinerary day", day_id)
    removed = unwrap(await itinerary.delete(day_id), "delete_itinerary_day")
    require(removed or None, "itinerary day", day_id)
    return model_response(DeleteResult(id=str(day_id)))
