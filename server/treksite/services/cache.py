"""Shared in-process query cache for entity services.

Every service instance reads its list from here instead of keeping a private
copy, so two consumers of the same entity/query always observe the same
snapshot and concurrent loads of one key collapse into a single backend call.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, NamedTuple, Optional

from ..core.backend import BackendError
from ..core.observability import metrics_collector

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[list[Any]]]
Listener = Callable[["QueryKey"], None]

MAX_LOAD_ATTEMPTS = 3


class QueryKey(NamedTuple):
    """Cache key: entity table plus the equality filters of the query."""

    entity: str
    query: tuple = ()

    @classmethod
    def build(cls, entity: str, filters: Optional[dict[str, Any]] = None) -> "QueryKey":
        return cls(entity, tuple(sorted((filters or {}).items())))


@dataclass
class CacheEntry:
    items: list[Any]
    loader: Loader


class QueryCache:
    """Entity+query keyed cache with fetch deduplication and change listeners."""

    def __init__(self):
        self._entries: dict[QueryKey, CacheEntry] = {}
        self._inflight: dict[QueryKey, asyncio.Task] = {}
        self._listeners: dict[QueryKey, list[Listener]] = {}
        self._generations: dict[str, int] = {}

    def generation(self, entity: str) -> int:
        """Write counter of an entity, bumped by every patch and invalidation."""
        return self._generations.get(entity, 0)

    def _bump(self, entity: str) -> None:
        self._generations[entity] = self._generations.get(entity, 0) + 1

    def get(self, key: QueryKey) -> Optional[list[Any]]:
        """Return a copy of the cached list, or None when the key is cold."""
        entry = self._entries.get(key)
        return list(entry.items) if entry else None

    def keys(self) -> list[QueryKey]:
        return list(self._entries)

    async def fetch(self, key: QueryKey, loader: Loader, force: bool = False) -> list[Any]:
        """
        Return the list for a key, loading it when cold or forced.

        Concurrent callers for the same key share one in-flight load. Cancelling
        one caller does not cancel the shared load.

        Raises:
            BackendError: If the loader fails
        """
        if not force and key in self._entries:
            return self.get(key)

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.create_task(self._load(key, loader))
            task.add_done_callback(self._consume_result)
            self._inflight[key] = task

        items = await asyncio.shield(task)
        return list(items)

    async def _load(self, key: QueryKey, loader: Loader) -> list[Any]:
        # A write to the entity while the loader runs makes its snapshot stale
        try:
            for attempt in range(1, MAX_LOAD_ATTEMPTS + 1):
                generation = self.generation(key.entity)
                try:
                    items = await loader()
                except Exception:
                    metrics_collector.record_cache_fetch(key.entity, "error")
                    raise
                if self.generation(key.entity) == generation:
                    break
                logger.debug(
                    "Cache load overlapped a write, reloading",
                    extra={"entity": key.entity, "attempt": attempt}
                )
            else:
                metrics_collector.record_cache_fetch(key.entity, "stale")
                return items
        finally:
            self._inflight.pop(key, None)

        metrics_collector.record_cache_fetch(key.entity, "ok")
        self._entries[key] = CacheEntry(items=list(items), loader=loader)
        metrics_collector.set_cache_keys(len(self._entries))
        self._notify(key)
        return items

    @staticmethod
    def _consume_result(task: asyncio.Task) -> None:
        # Waiters may all have been cancelled; retrieve the outcome so a failed
        # load is not reported as an unretrieved task exception.
        if not task.cancelled():
            task.exception()

    def patch(self, key: QueryKey, change: Callable[[list[Any]], list[Any]]) -> None:
        """
        Apply a local change to one key and invalidate the entity's other keys.

        A cold key is left cold; the next fetch loads the fresh table. Either
        way a load of the entity already in flight reloads before it is stored.
        """
        entry = self._entries.get(key)
        if entry is not None:
            entry.items = change(list(entry.items))
            self._notify(key)
        self.invalidate(key.entity, keep=key)

    def invalidate(self, entity: str, keep: Optional[QueryKey] = None) -> None:
        """Drop every cached query of an entity (except ``keep``)."""
        self._bump(entity)
        stale = [k for k in self._entries if k.entity == entity and k != keep]
        for key in stale:
            del self._entries[key]
            self._notify(key)
        if stale:
            metrics_collector.set_cache_keys(len(self._entries))
            logger.debug(
                "Cache entries invalidated",
                extra={"entity": entity, "count": len(stale)}
            )

    def subscribe(self, key: QueryKey, listener: Listener) -> Callable[[], None]:
        """Register a change listener for a key; returns the unsubscribe callable."""
        self._listeners.setdefault(key, []).append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(key, [])
            if listener in listeners:
                listeners.remove(listener)
            if not listeners:
                self._listeners.pop(key, None)

        return unsubscribe

    def _notify(self, key: QueryKey) -> None:
        for listener in list(self._listeners.get(key, ())):
            listener(key)

    async def refresh(self) -> int:
        """
        Re-run the loader of every warm key.

        Returns:
            Number of keys refreshed successfully
        """
        refreshed = 0
        for key, entry in list(self._entries.items()):
            try:
                await self.fetch(key, entry.loader, force=True)
                refreshed += 1
            except BackendError as e:
                logger.warning(
                    "Cache refresh failed for key",
                    extra={"entity": key.entity, "query": repr(key.query), "error": str(e)}
                )
        return refreshed

    def clear(self) -> None:
        for entity in {key.entity for key in [*self._entries, *self._inflight]}:
            self._bump(entity)
        for key in list(self._entries):
            del self._entries[key]
            self._notify(key)
        metrics_collector.set_cache_keys(0)
