"""Site-wide settings singleton."""

from sqlalchemy import JSON, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base
from .mixins import RowMixin


class SiteSettings(RowMixin, Base):
    """Single row of site-wide configuration edited from the admin panel."""

    __tablename__ = "settings"

    # Contact information
    phone_numbers: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    email_addresses: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    office_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    whatsapp: Mapped[str | None] = mapped_column(String(50), nullable=True)
    viber: Mapped[str | None] = mapped_column(String(50), nullable=True)
    emergency_contact: Mapped[str | None] = mapped_column(String(100), nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    map_embed_link: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Social links
    facebook_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    instagram_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    twitter_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    youtube_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    linkedin_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    tiktok_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # Branding
    logo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    dark_logo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    favicon_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    hero_image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    footer_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    copyright_text: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # SEO defaults
    default_meta_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    default_meta_description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    default_keywords: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    default_og_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # Tracking snippets
    google_analytics_code: Mapped[str | None] = mapped_column(Text, nullable=True)
    tag_manager_code: Mapped[str | None] = mapped_column(Text, nullable=True)
    facebook_pixel_code: Mapped[str | None] = mapped_column(Text, nullable=True)
