"""Stored SEO suggestion model."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import JSON, Boolean, DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base
from .mixins import RowMixin


class SeoSuggestion(RowMixin, Base):
    """Suggestion generated for a trek, blog post or page, kept for review."""

    __tablename__ = "seo_suggestions"

    content_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    content_type: Mapped[str] = mapped_column(String(20), nullable=False)

    original_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    original_content: Mapped[str | None] = mapped_column(Text, nullable=True)

    suggested_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    suggested_description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    suggested_keywords: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    content_improvements: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    internal_link_suggestions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    missing_sections: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    is_applied: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    applied_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
