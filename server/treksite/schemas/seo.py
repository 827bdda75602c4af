"""SEO optimization Pydantic schemas."""

from datetime import datetime
from typing import Any, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

ContentType = Literal["trek", "blog", "page"]


class SeoRequest(BaseModel):
    """Content to optimize."""

    title: str = Field(..., min_length=1, max_length=500)
    content: str = Field("", description="Body text; HTML tags are ignored")
    content_type: ContentType = "page"
    region: Optional[str] = Field(None, max_length=100)
    duration: Optional[str] = None
    altitude: Optional[str] = None
    difficulty: Optional[str] = None
    current_keywords: list[str] = Field(
        default_factory=list,
        description="Keywords to use instead of extracting them from the content"
    )
    rating: Optional[float] = Field(None, ge=0, le=5)
    review_count: Optional[int] = Field(None, ge=0)
    content_id: Optional[UUID] = Field(None, description="Trek or post the suggestion is stored against")


class OgTags(BaseModel):
    og_title: str
    og_description: str
    og_image: Optional[str] = None


class TwitterTags(BaseModel):
    twitter_title: str
    twitter_description: str


class SeoReport(BaseModel):
    """Optimization suggestions for one piece of content."""

    meta_title: str
    meta_description: str
    slug: str
    keywords: list[str] = Field(default_factory=list)
    long_tail_keywords: list[str] = Field(default_factory=list)
    schema_markup: dict[str, Any] = Field(default_factory=dict, description="JSON-LD structured data")
    og_tags: OgTags
    twitter_tags: TwitterTags
    content_improvements: list[str] = Field(default_factory=list)
    internal_link_suggestions: list[str] = Field(default_factory=list)
    missing_sections: list[str] = Field(default_factory=list)
    readability_score: int = Field(..., ge=0, le=100)
    recommendations: list[str] = Field(default_factory=list)
    strategy: str = Field("local", description="Strategy that produced the report")


class SeoOptimizeResponse(BaseModel):
    """Report plus the id of the stored suggestion, when one was recorded."""

    report: SeoReport
    suggestion_id: Optional[UUID] = None


class SeoSuggestion(BaseModel):
    """Stored SEO suggestion response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    content_id: UUID
    content_type: str
    original_title: Optional[str] = None
    suggested_title: Optional[str] = None
    suggested_description: Optional[str] = None
    suggested_keywords: list[str] = Field(default_factory=list)
    content_improvements: list[str] = Field(default_factory=list)
    internal_link_suggestions: list[str] = Field(default_factory=list)
    missing_sections: list[str] = Field(default_factory=list)
    is_applied: bool = False
    applied_at: Optional[datetime] = None
    created_at: datetime
