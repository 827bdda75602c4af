"""Site settings singleton service."""

import logging
from typing import Any, Mapping, Optional

from ..core.backend import Order
from .base import EntityService, Result

logger = logging.getLogger(__name__)

NO_SETTINGS = "No settings found"


class SiteSettingsService(EntityService):
    """The single settings row."""

    table = "settings"
    order_by = (Order("created_at"),)
    limit = 1

    @property
    def current(self) -> Optional[Any]:
        return self.items[0] if self.items else None

    async def load(self) -> Result[Any]:
        """Return the settings row, or ``data=None`` when none exists yet."""
        result = await self.fetch()
        if not result.ok:
            return result
        return Result(data=result.data[0] if result.data else None)

    async def update_settings(self, values: Mapping[str, Any]) -> Result[Any]:
        loaded = await self.load()
        if not loaded.ok:
            return loaded
        if loaded.data is None:
            logger.warning("Settings update without a settings row")
            return Result(error=NO_SETTINGS)
        return await self.update(loaded.data.id, values)
