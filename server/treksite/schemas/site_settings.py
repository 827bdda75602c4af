"""Site settings Pydantic schemas."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class SiteSettingsUpdate(BaseModel):
    """Partial update of the site settings row."""

    phone_numbers: Optional[list[str]] = None
    email_addresses: Optional[list[str]] = None
    office_address: Optional[str] = None
    whatsapp: Optional[str] = None
    viber: Optional[str] = None
    emergency_contact: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    map_embed_link: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    twitter_url: Optional[str] = None
    youtube_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    tiktok_url: Optional[str] = None
    logo_url: Optional[str] = None
    dark_logo_url: Optional[str] = None
    favicon_url: Optional[str] = None
    hero_image_url: Optional[str] = None
    footer_text: Optional[str] = None
    copyright_text: Optional[str] = None
    default_meta_title: Optional[str] = None
    default_meta_description: Optional[str] = None
    default_keywords: Optional[list[str]] = None
    default_og_image: Optional[str] = None
    google_analytics_code: Optional[str] = None
    tag_manager_code: Optional[str] = None
    facebook_pixel_code: Optional[str] = None


class SiteSettings(SiteSettingsUpdate):
    """Site settings response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    phone_numbers: list[str] = []
    email_addresses: list[str] = []
    default_keywords: list[str] = []
