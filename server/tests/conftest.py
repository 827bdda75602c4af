"""Test configuration and fixtures."""

import os

# Configure the application before any treksite module reads settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BEARER_TOKEN_SECRET", "test-secret")
os.environ.setdefault("CACHE_REFRESH_INTERVAL_SECONDS", "0")
os.environ.setdefault("ENVIRONMENT", "development")

import jwt  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from treksite import models  # noqa: E402,F401
from treksite.core.backend import TableClient  # noqa: E402
from treksite.core.config import settings  # noqa: E402
from treksite.core.database import Base  # noqa: E402
from treksite.core.dependencies import get_backend, get_cache, get_storage  # noqa: E402
from treksite.services.cache import QueryCache  # noqa: E402
from treksite.services.storage import LocalObjectStorage  # noqa: E402

# Test database URL (in-memory SQLite for speed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine with a fresh schema."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def backend(test_engine):
    """Table client bound to the test database."""
    session_factory = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    return TableClient(session_factory)


@pytest.fixture
def cache():
    """A fresh shared query cache per test."""
    return QueryCache()


@pytest.fixture
def storage(tmp_path):
    """Object storage writing into a temporary directory."""
    return LocalObjectStorage(str(tmp_path / "media"), "http://test/media")


@pytest_asyncio.fixture(scope="function")
async def test_app(backend, cache, storage):
    """Create a test FastAPI application without lifespan or telemetry."""
    from fastapi import FastAPI
    from fastapi.exceptions import RequestValidationError

    from treksite.core.exceptions import (
        ProblemDetailsException,
        generic_exception_handler,
        problem_details_handler,
        request_validation_handler,
    )
    from treksite.core.middleware import setup_middleware
    from treksite.routers import (
        blog_router,
        bookings_router,
        contact_router,
        health_router,
        metrics_router,
        pages_router,
        treks_router,
    )
    from treksite.routers.admin import content_router, inbox_router, media_router, seo_router

    app = FastAPI(title="Trek Site API (Test)", version="1.0.0-test")

    setup_middleware(app, enable_logging=True)

    app.add_exception_handler(ProblemDetailsException, problem_details_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    for router in (
        health_router,
        treks_router,
        blog_router,
        pages_router,
        bookings_router,
        contact_router,
        content_router,
        inbox_router,
        media_router,
        seo_router,
        metrics_router,
    ):
        app.include_router(router)

    app.dependency_overrides[get_backend] = lambda: backend
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_storage] = lambda: storage

    yield app

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def make_token(roles, sub="user-1", email="staff@nepaltreks.com"):
    return jwt.encode(
        {"sub": sub, "email": email, "roles": roles},
        settings.bearer_token_secret,
        algorithm="HS256",
    )


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {make_token(['admin'])}"}


@pytest.fixture
def user_headers():
    return {"Authorization": f"Bearer {make_token([])}"}


@pytest.fixture
def sample_trek_data():
    """Sample trek row for testing."""
    return {
        "name": "Everest Base Camp Trek",
        "slug": "everest-base-camp",
        "region": "Everest",
        "short_description": "Journey to the foot of the world's highest peak.",
        "description": "Walk through Sherpa villages to the base of Mount Everest.",
        "difficulty": "Challenging",
        "duration": "14 Days",
        "max_altitude": "5,364m",
        "price": 1450,
        "rating": 4.9,
        "review_count": 342,
        "is_published": True,
        "is_featured": True,
    }


@pytest.fixture
def sample_booking_form():
    """Sample public booking form."""
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "phone": "+44 20 0000 0000",
        "country": "United Kingdom",
        "departure_date": "2026-10-01",
        "travelers_count": 2,
    }


@pytest.fixture
def auth_headers():
    """Build Authorization headers for any roles and claims."""
    def build(roles, **claims):
        return {"Authorization": f"Bearer {make_token(roles, **claims)}"}
    return build
