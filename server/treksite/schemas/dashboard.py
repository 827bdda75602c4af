"""Admin dashboard schema."""

from pydantic import BaseModel, Field


class DashboardCounts(BaseModel):
    """Headline counts shown on the admin dashboard."""

    treks: int = Field(..., description="All treks")
    published_treks: int = Field(..., description="Treks visible on the storefront")
    bookings: int
    pending_bookings: int = Field(..., description="Bookings with status 'pending'")
    blog_posts: int
    unread_messages: int = Field(..., description="Contact submissions not yet read")
    media_items: int
