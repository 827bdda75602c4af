"""Background worker that keeps the shared query cache fresh."""

import logging

from ..services.cache import QueryCache
from .base import BaseWorker

logger = logging.getLogger(__name__)


class CacheRefreshWorker(BaseWorker):
    """
    Re-fetch every warm cache key on an interval.

    Rows edited directly in the database (or by another process) reach every
    consumer of the cache within one interval.
    """

    def __init__(self, cache: QueryCache, interval_seconds: float = 300):
        super().__init__(name="CacheRefresh", interval_seconds=interval_seconds)
        self.cache = cache

    async def process(self) -> None:
        keys = len(self.cache.keys())
        if not keys:
            return

        refreshed = await self.cache.refresh()
        logger.info(
            "Query cache refreshed",
            extra={"worker": self.name, "keys": keys, "refreshed": refreshed}
        )
