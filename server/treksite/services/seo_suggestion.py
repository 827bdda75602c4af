"""Stored SEO suggestion service."""

import logging
from typing import Any
from uuid import UUID

from ..core.backend import TableClient
from ..core.database import utcnow
from ..schemas.seo import SeoReport, SeoRequest
from .base import EntityService, Result
from .cache import QueryCache
from .catalog import TrekService
from .content import BlogPostService

logger = logging.getLogger(__name__)


class SeoSuggestionService(EntityService):
    """Suggestions kept for review, newest first."""

    table = "seo_suggestions"

    def __init__(self, backend: TableClient, cache: QueryCache):
        super().__init__(backend, cache)
        self._targets = {
            "trek": TrekService(backend, cache),
            "blog": BlogPostService(backend, cache),
        }

    async def record(self, request: SeoRequest, report: SeoReport) -> Result[Any]:
        """Store a report against the content it was generated for."""
        return await self.create({
            "content_id": request.content_id,
            "content_type": request.content_type,
            "original_title": request.title,
            "original_content": request.content,
            "suggested_title": report.meta_title,
            "suggested_description": report.meta_description,
            "suggested_keywords": report.keywords,
            "content_improvements": report.content_improvements,
            "internal_link_suggestions": report.internal_link_suggestions,
            "missing_sections": report.missing_sections,
            "is_applied": False,
        })

    async def apply(self, suggestion_id: UUID) -> Result[Any]:
        """
        Copy a suggestion's title, description and keywords onto its trek or
        blog post, then mark the suggestion applied.
        """
        found = await self.get(suggestion_id)
        if not found.ok:
            return found
        suggestion = found.data
        if suggestion is None:
            return Result(error=f"No SEO suggestion with id '{suggestion_id}'", not_found=True)

        target = self._targets.get(suggestion.content_type)
        if target is None:
            return Result(error=f"Suggestions for '{suggestion.content_type}' content cannot be applied")

        changes = {
            "meta_title": suggestion.suggested_title,
            "meta_description": suggestion.suggested_description,
            "seo_keywords": list(suggestion.suggested_keywords),
        }
        applied = await target.update(suggestion.content_id, changes)
        if not applied.ok:
            return applied

        logger.info(
            "SEO suggestion applied",
            extra={"suggestion_id": str(suggestion_id), "content_type": suggestion.content_type}
        )
        return await self.update(suggestion_id, {"is_applied": True, "applied_at": utcnow()})
