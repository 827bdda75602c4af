"""Admin media library and site settings."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from ...core.dependencies import AdminUser, get_media_service, get_settings_service
from ...core.exceptions import NotFoundError, ValidationError
from ...schemas.common import DeleteResult
from ...schemas.media import MediaItem, MediaUpdate
from ...schemas.site_settings import SiteSettings, SiteSettingsUpdate
from ...services.media import MediaLibraryService
from ...services.site_settings import NO_SETTINGS, SiteSettingsService
from ..common import PROBLEM_RESPONSES, list_response, model_response, require, unwrap

router = APIRouter(
    prefix="/v1/admin",
    tags=["admin"],
    dependencies=[AdminUser],
    responses=PROBLEM_RESPONSES,
)


@router.get("/media", response_model=list[MediaItem])
async def list_media(media: MediaLibraryService = Depends(get_media_service)) -> JSONResponse:
    rows = unwrap(await media.fetch(), "list_media")
    return list_response(MediaItem, rows)


@router.post("/media", response_model=MediaItem, status_code=201)
async def upload_media(
    request: Request,
    file_name: str = Query(..., min_length=1, max_length=255),
    category: Optional[str] = Query(None, max_length=100),
    alt_text: Optional[str] = Query(None, max_length=500),
    caption: Optional[str] = Query(None, max_length=1000),
    media: MediaLibraryService = Depends(get_media_service),
) -> JSONResponse:
    """
    Upload one file as the raw request body.

    The Content-Type header is stored as the mime type.
    """
    data = await request.body()
    if not data:
        raise ValidationError(
            detail="Upload body is empty",
            violations=[{"path": "body", "message": "File content is required"}],
        )

    row = unwrap(
        await media.upload(
            file_name,
            data,
            request.headers.get("content-type"),
            category=category,
            alt_text=alt_text,
            caption=caption,
        ),
        "upload_media",
    )
    return model_response(MediaItem.model_validate(row), status_code=201)


@router.patch("/media/{media_id}", response_model=MediaItem)
async def update_media(
    media_id: UUID,
    payload: MediaUpdate,
    media: MediaLibraryService = Depends(get_media_service),
) -> JSONResponse:
    row = unwrap(
        await media.update(media_id, payload.model_dump(exclude_unset=True)),
        "update_media",
        "media item",
        media_id,
    )
    return model_response(MediaItem.model_validate(row))


@router.delete("/media/{media_id}", response_model=DeleteResult)
async def delete_media(media_id: UUID, media: MediaLibraryService = Depends(get_media_service)) -> JSONResponse:
    removed = unwrap(await media.delete(media_id), "delete_media")
    require(removed or None, "media item", media_id)
    return model_response(DeleteResult(id=str(media_id)))


@router.get("/settings", response_model=SiteSettings)
async def get_settings(service: SiteSettingsService = Depends(get_settings_service)) -> JSONResponse:
    row = require(unwrap(await service.load(), "get_settings"), "site settings", "current")
    return model_response(SiteSettings.model_validate(row))


@router.patch("/settings", response_model=SiteSettings)
async def update_settings(
    payload: SiteSettingsUpdate,
    service: SiteSettingsService = Depends(get_settings_service),
) -> JSONResponse:
    result = await service.update_settings(payload.model_dump(exclude_unset=True))
    if result.error == NO_SETTINGS:
        raise NotFoundError(resource_type="site settings", detail=NO_SETTINGS)
    row = unwrap(result, "update_settings")
    return model_response(SiteSettings.model_validate(row))
