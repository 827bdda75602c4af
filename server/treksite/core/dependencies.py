"""FastAPI dependencies for data access, storage, SEO and authentication."""

from typing import Any, Optional

import jwt
from fastapi import Depends, Header
from jwt import PyJWTError

from ..seo.optimizer import LocalSeoStrategy, RemoteSeoStrategy, SeoOptimizer
from ..services.bookings import BookingService
from ..services.cache import QueryCache
from ..services.catalog import TrekService
from ..services.contact import ContactSubmissionService
from ..services.content import BlogPostService, FaqService, TeamMemberService
from ..services.media import MediaLibraryService
from ..services.seo_suggestion import SeoSuggestionService
from ..services.site_settings import SiteSettingsService
from ..services.storage import LocalObjectStorage, ObjectStorage
from .backend import TableClient
from .config import settings
from .database import async_session_factory
from .exceptions import AuthenticationError, AuthorizationError, OperationFailedError

# Process-wide instances shared by every request
table_client = TableClient(async_session_factory)
query_cache = QueryCache()
object_storage = LocalObjectStorage(settings.media_root, settings.media_base_url)


def get_backend() -> TableClient:
    return table_client


def get_cache() -> QueryCache:
    return query_cache


def get_storage() -> ObjectStorage:
    return object_storage


# Entity services are cheap views over the shared cache; one per request

def get_trek_service(backend: TableClient = Depends(get_backend), cache: QueryCache = Depends(get_cache)) -> TrekService:
    return TrekService(backend, cache)


def get_blog_service(backend: TableClient = Depends(get_backend), cache: QueryCache = Depends(get_cache)) -> BlogPostService:
    return BlogPostService(backend, cache)


def get_booking_service(backend: TableClient = Depends(get_backend), cache: QueryCache = Depends(get_cache)) -> BookingService:
    return BookingService(backend, cache)


def get_contact_service(
    backend: TableClient = Depends(get_backend),
    cache: QueryCache = Depends(get_cache),
) -> ContactSubmissionService:
    return ContactSubmissionService(backend, cache)


def get_faq_service(backend: TableClient = Depends(get_backend), cache: QueryCache = Depends(get_cache)) -> FaqService:
    return FaqService(backend, cache)


def get_team_service(backend: TableClient = Depends(get_backend), cache: QueryCache = Depends(get_cache)) -> TeamMemberService:
    return TeamMemberService(backend, cache)


def get_media_service(
    backend: TableClient = Depends(get_backend),
    cache: QueryCache = Depends(get_cache),
    storage: ObjectStorage = Depends(get_storage),
) -> MediaLibraryService:
    return MediaLibraryService(backend, cache, storage)


def get_settings_service(
    backend: TableClient = Depends(get_backend),
    cache: QueryCache = Depends(get_cache),
) -> SiteSettingsService:
    return SiteSettingsService(backend, cache)


def get_seo_suggestion_service(
    backend: TableClient = Depends(get_backend),
    cache: QueryCache = Depends(get_cache),
) -> SeoSuggestionService:
    return SeoSuggestionService(backend, cache)


def get_seo_optimizer() -> SeoOptimizer:
    local = LocalSeoStrategy(settings.site_name, settings.site_url)
    remote = RemoteSeoStrategy(settings.seo_remote_url, settings.seo_remote_timeout_seconds)
    return SeoOptimizer([remote], local)


async def get_site_settings(service: SiteSettingsService = Depends(get_settings_service)) -> Optional[Any]:
    """
    The site settings row, read once through the shared cache.

    Returns None when no settings row exists yet.

    Raises:
        OperationFailedError: If the settings cannot be loaded
    """
    result = await service.load()
    if not result.ok:
        raise OperationFailedError(result.error, operation="load_site_settings")
    return result.data


async def get_current_user(
    authorization: Optional[str] = Header(None, alias="Authorization")
) -> dict:
    """
    Authentication dependency that validates Bearer tokens.

    Args:
        authorization: Authorization header with Bearer token

    Returns:
        dict: User information from validated token

    Raises:
        AuthenticationError: If the token is missing, malformed, expired or invalid
    """
    if not authorization:
        raise AuthenticationError("Authorization header missing")

    try:
        scheme, token = authorization.split()
    except ValueError:
        raise AuthenticationError("Invalid authorization header format")

    if scheme.lower() != "bearer":
        raise AuthenticationError("Invalid authentication scheme")

    try:
        # Expiry is enforced by jwt.decode when the token carries "exp"
        payload = jwt.decode(
            token,
            settings.bearer_token_secret,
            algorithms=["HS256"]
        )
    except PyJWTError as e:
        raise AuthenticationError(f"Token validation failed: {str(e)}")

    user_id = payload.get("sub")
    if user_id is None:
        raise AuthenticationError("Invalid token payload")

    return {
        "user_id": user_id,
        "username": payload.get("username"),
        "email": payload.get("email"),
        "roles": payload.get("roles", []),
    }


async def require_admin(user: dict = Depends(get_current_user)) -> dict:
    """Allow only users holding the admin role."""
    if settings.admin_role not in (user.get("roles") or []):
        raise AuthorizationError(required_permissions=[settings.admin_role])
    return user


AdminUser = Depends(require_admin)
