"""Models module exporting all database models."""

from .booking import Booking
from .contact import ContactSubmission
from .content import BlogPost, Faq, TeamMember
from .media import MediaLibraryItem
from .seo import SeoSuggestion
from .site_settings import SiteSettings
from .trek import Trek, TrekItinerary

__all__ = [
    # Catalog
    "Trek",
    "TrekItinerary",

    # Storefront submissions
    "Booking",
    "ContactSubmission",

    # Editorial content
    "BlogPost",
    "Faq",
    "TeamMember",
    "MediaLibraryItem",

    # Site configuration and tooling
    "SiteSettings",
    "SeoSuggestion",
]
