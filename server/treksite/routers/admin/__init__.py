"""Admin routers; every route requires a bearer token with the admin role."""

from .content import router as content_router
from .inbox import router as inbox_router
from .media import router as media_router
from .seo import router as seo_router

__all__ = [
    "content_router",
    "inbox_router",
    "media_router",
    "seo_router",
]
