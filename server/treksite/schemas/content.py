"""Blog, FAQ and team Pydantic schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .trek import SLUG_PATTERN


class BlogPostCreate(BaseModel):
    """Request schema for creating a blog post."""

    title: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN)
    content: Optional[str] = None
    excerpt: Optional[str] = Field(None, max_length=1000)
    category: Optional[str] = Field(None, max_length=100)
    featured_image_url: Optional[str] = None
    author_name: Optional[str] = Field(None, max_length=255)
    is_published: bool = False
    is_featured: bool = False
    published_at: Optional[datetime] = None
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = Field(None, max_length=500)
    seo_keywords: list[str] = Field(default_factory=list)


class BlogPostUpdate(BaseModel):
    """Request schema for a partial blog post update."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    content: Optional[str] = None
    excerpt: Optional[str] = Field(None, max_length=1000)
    category: Optional[str] = Field(None, max_length=100)
    featured_image_url: Optional[str] = None
    author_name: Optional[str] = Field(None, max_length=255)
    is_published: Optional[bool] = None
    is_featured: Optional[bool] = None
    published_at: Optional[datetime] = None
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = Field(None, max_length=500)
    seo_keywords: Optional[list[str]] = None


class BlogPost(BlogPostCreate):
    """Blog post response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    slug: str
    view_count: int = 0
    created_at: datetime
    updated_at: datetime


class BlogListing(BaseModel):
    """Blog index: the featured post and the remaining posts."""

    featured: Optional[BlogPost] = None
    posts: list[BlogPost] = Field(default_factory=list)


class FaqCreate(BaseModel):
    """Request schema for creating a FAQ."""

    category: str = Field(..., min_length=1, max_length=100)
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    display_order: Optional[int] = None
    is_active: bool = True


class FaqUpdate(BaseModel):
    """Request schema for a partial FAQ update."""

    category: Optional[str] = Field(None, min_length=1, max_length=100)
    question: Optional[str] = Field(None, min_length=1)
    answer: Optional[str] = Field(None, min_length=1)
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class Faq(FaqCreate):
    """FAQ response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID


class FaqGroup(BaseModel):
    """FAQs sharing one category."""

    category: str
    items: list[Faq]


class TeamMemberCreate(BaseModel):
    """Request schema for creating a team member."""

    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field(..., min_length=1, max_length=255)
    bio: Optional[str] = None
    image_url: Optional[str] = None
    display_order: Optional[int] = None
    is_active: bool = True


class TeamMemberUpdate(BaseModel):
    """Request schema for a partial team member update."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[str] = Field(None, min_length=1, max_length=255)
    bio: Optional[str] = None
    image_url: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class TeamMember(TeamMemberCreate):
    """Team member response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
