"""Editorial content services: blog posts, FAQs and team members."""

from typing import Any

from ..core.backend import Order
from .base import EntityService, Result


class BlogPostService(EntityService):
    """All blog posts, newest first."""

    table = "blog_posts"

    async def get_by_slug(self, slug: str) -> Result[Any]:
        result = await self.fetch()
        if not result.ok:
            return result
        return Result(data=next((post for post in result.data if post.slug == slug), None))


class FaqService(EntityService):
    """FAQs ordered by category, then display order. New entries go last."""

    table = "faqs"
    order_by = (Order("category"), Order("display_order"))
    insert_at = "end"


class TeamMemberService(EntityService):
    """Team members in display order. New members go last."""

    table = "team_members"
    order_by = (Order("display_order"),)
    insert_at = "end"
