"""Trek and itinerary model definitions."""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import JSON, Boolean, CheckConstraint, Float, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.database import Base
from .mixins import RowMixin

if TYPE_CHECKING:
    from .booking import Booking


class Trek(RowMixin, Base):
    """Trek entity: one bookable trekking route in the catalog."""

    __tablename__ = "treks"

    # Catalog information
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    region: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    short_description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Trek facts
    difficulty: Mapped[str | None] = mapped_column(String(20), nullable=True)
    duration: Mapped[str | None] = mapped_column(String(50), nullable=True)
    max_altitude: Mapped[str | None] = mapped_column(String(50), nullable=True)
    best_seasons: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Pricing and reviews (price in whole currency units per person)
    price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    review_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Content lists
    highlights: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    includes: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    excludes: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    gallery_images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    featured_image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # Flags
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # SEO metadata
    meta_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    meta_description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    seo_keywords: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    long_tail_keywords: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        CheckConstraint("price IS NULL OR price >= 0", name="ck_trek_price_non_negative"),
        CheckConstraint("length(slug) > 0", name="ck_trek_slug_not_empty"),
    )

    # Relationships
    itinerary: Mapped[list["TrekItinerary"]] = relationship(
        "TrekItinerary",
        back_populates="trek",
        cascade="all, delete-orphan"
    )
    bookings: Mapped[list["Booking"]] = relationship("Booking", back_populates="trek")

    def __repr__(self) -> str:
        return f"<Trek(id={self.id}, name='{self.name}', slug='{self.slug}')>"


class TrekItinerary(RowMixin, Base):
    """One numbered day of a trek's itinerary."""

    __tablename__ = "trek_itineraries"

    trek_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("treks.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    day_number: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    altitude: Mapped[str | None] = mapped_column(String(50), nullable=True)
    distance: Mapped[str | None] = mapped_column(String(50), nullable=True)
    activities: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        CheckConstraint("day_number > 0", name="ck_itinerary_day_positive"),
    )

    trek: Mapped["Trek"] = relationship("Trek", back_populates="itinerary")

    def __repr__(self) -> str:
        return f"<TrekItinerary(trek_id={self.trek_id}, day={self.day_number}, title='{self.title}')>"
