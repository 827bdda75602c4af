"""Trek catalog services."""

from typing import Any, Optional
from uuid import UUID

from ..core.backend import Order, TableClient
from .base import EntityService, Result
from .cache import QueryCache


class TrekService(EntityService):
    """All treks, newest first."""

    table = "treks"

    async def delete(self, row_id: UUID) -> Result[bool]:
        result = await super().delete(row_id)
        if result.ok:
            # Itinerary rows go with the trek
            self.cache.invalidate(ItineraryService.table)
        return result

    async def get_by_slug(self, slug: str) -> Result[Any]:
        result = await self.fetch()
        if not result.ok:
            return result
        return Result(data=next((trek for trek in result.data if trek.slug == slug), None))


class ItineraryService(EntityService):
    """Itinerary days of one trek, ordered by day number."""

    table = "trek_itineraries"
    order_by = (Order("day_number"),)
    insert_at = "end"

    def __init__(self, backend: TableClient, cache: QueryCache, trek_id: UUID):
        super().__init__(backend, cache, filters={"trek_id": trek_id})
        self.trek_id = trek_id

    async def create(self, values) -> Result[Any]:
        return await super().create({**values, "trek_id": self.trek_id})

    async def update(self, row_id: UUID, values) -> Result[Any]:
        values = {k: v for k, v in values.items() if k != "trek_id"}
        return await super().update(row_id, values)


async def load_itinerary(backend: TableClient, cache: QueryCache, trek_id: Optional[UUID]) -> Result[list[Any]]:
    """Fetch a trek's itinerary through a short-lived service."""
    if trek_id is None:
        return Result(data=[])
    async with ItineraryService(backend, cache, trek_id) as service:
        return await service.fetch()
