"""Entity service base: one backend table bound to a shared cached list."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar
from uuid import UUID

from ..core.backend import BackendError, Order, RowNotFoundError, TableClient
from ..core.database import utcnow
from .cache import QueryCache, QueryKey

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Result(Generic[T]):
    """
    Outcome of a service call: data on success, a message string on failure.

    ``not_found`` marks a failure caused by a row id that does not exist.
    """

    data: Optional[T] = None
    error: Optional[str] = None
    not_found: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class EntityService:
    """
    Data-access unit for one table.

    The full ordered table (optionally narrowed by equality filters) is read
    through the shared ``QueryCache``; mutations write to the backend and then
    patch the cached list so every consumer of the same key sees the change.
    No method raises for backend failures; they come back as ``Result.error``.

    Subclasses set ``table``, ``order_by`` and ``insert_at``.
    """

    table: str = ""
    order_by: tuple[Order, ...] = (Order("created_at", descending=True),)
    limit: Optional[int] = None
    insert_at: str = "start"  # "start" or "end" of the cached list

    def __init__(self, backend: TableClient, cache: QueryCache, filters: Optional[Mapping[str, Any]] = None):
        self.backend = backend
        self.cache = cache
        self.filters = dict(filters or {})
        self.key = QueryKey.build(self.table, self.filters)

        self.items: list[Any] = []
        self.loading = False
        self.error: Optional[str] = None
        self.closed = False

        self._task: Optional[asyncio.Task] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    # Lifecycle

    def mount(self) -> asyncio.Task:
        """Subscribe to cache changes and start the initial fetch."""
        self.closed = False
        if self._unsubscribe is None:
            self._unsubscribe = self.cache.subscribe(self.key, self._on_cache_change)
        self._task = asyncio.create_task(self.fetch())
        return self._task

    def close(self) -> None:
        """
        Stop observing the cache and cancel this service's pending fetch.

        A load shared with other services keeps running for them.
        """
        self.closed = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def __aenter__(self) -> "EntityService":
        await self.mount()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _on_cache_change(self, key: QueryKey) -> None:
        if self.closed:
            return
        cached = self.cache.get(key)
        if cached is not None:
            self.items = cached

    # Reads

    async def _select(self) -> list[Any]:
        return await self.backend.select(
            self.table,
            filters=self.filters,
            order_by=self.order_by,
            limit=self.limit,
        )

    async def fetch(self, force: bool = False) -> Result[list[Any]]:
        """Load the ordered list, from the cache when it is warm."""
        self.loading = True
        try:
            items = await self.cache.fetch(self.key, self._select, force=force)
        except BackendError as e:
            return self._failure("fetch", e)
        finally:
            self.loading = False

        if not self.closed:
            self.items = items
            self.error = None
        return Result(data=items)

    async def get(self, row_id: UUID) -> Result[Any]:
        """Find one row by id in the cached list (``data`` is None when absent)."""
        result = await self.fetch()
        if not result.ok:
            return result
        return Result(data=next((row for row in result.data if row.id == row_id), None))

    # Mutations

    async def create(self, values: Mapping[str, Any]) -> Result[Any]:
        try:
            row = await self.backend.insert(self.table, dict(values))
        except BackendError as e:
            return self._failure("create", e)

        if self.insert_at == "end":
            self._apply(lambda items: items + [row])
        else:
            self._apply(lambda items: [row] + items)
        return Result(data=row)

    async def update(self, row_id: UUID, values: Mapping[str, Any]) -> Result[Any]:
        changes = dict(values)
        changes["updated_at"] = utcnow()
        try:
            row = await self.backend.update(self.table, row_id, changes)
        except BackendError as e:
            return self._failure("update", e)

        self._apply(lambda items: [row if item.id == row_id else item for item in items])
        return Result(data=row)

    async def delete(self, row_id: UUID) -> Result[bool]:
        """Delete one row; ``data`` tells whether a row was actually removed."""
        try:
            removed = await self.backend.delete(self.table, row_id)
        except BackendError as e:
            return self._failure("delete", e)

        self._apply(lambda items: [item for item in items if item.id != row_id])
        return Result(data=removed > 0)

    def _apply(self, change: Callable[[list[Any]], list[Any]]) -> None:
        self.cache.patch(self.key, change)
        cached = self.cache.get(self.key)
        self.items = cached if cached is not None else change(list(self.items))

    def _failure(self, operation: str, error: BackendError) -> Result[Any]:
        if not self.closed:
            self.error = error.message
        logger.warning(
            "Entity operation failed",
            extra={"table": self.table, "operation": operation, "error": error.message}
        )
        return Result(error=error.message, not_found=isinstance(error, RowNotFoundError))
