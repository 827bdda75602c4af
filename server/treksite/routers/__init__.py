"""FastAPI routers package."""

from .blog import router as blog_router
from .bookings import router as bookings_router
from .contact import router as contact_router
from .health import router as health_router
from .metrics import router as metrics_router
from .pages import router as pages_router
from .treks import router as treks_router

__all__ = [
    "blog_router",
    "bookings_router",
    "contact_router",
    "health_router",
    "metrics_router",
    "pages_router",
    "treks_router",
]
