"""Contact submission service."""

from typing import Any
from uuid import UUID

from ..core.database import utcnow
from ..core.observability import metrics_collector
from .base import EntityService, Result


class ContactSubmissionService(EntityService):
    """Contact form messages, newest first."""

    table = "contact_submissions"

    async def submit(self, values) -> Result[Any]:
        """Store a message from the public form."""
        result = await self.create({**values, "is_read": False})
        if result.ok:
            metrics_collector.record_contact_submission()
        return result

    async def mark_as_read(self, submission_id: UUID) -> Result[Any]:
        return await self.update(submission_id, {"is_read": True})

    async def respond(self, submission_id: UUID, response_text: str, responded_by: str) -> Result[Any]:
        """Record a reply; answering a message also marks it read."""
        return await self.update(
            submission_id,
            {
                "response_text": response_text,
                "responded_by": responded_by,
                "responded_at": utcnow(),
                "is_read": True,
            }
        )
