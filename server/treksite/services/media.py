"""Media library service."""

import logging
from typing import Any, Optional
from uuid import UUID

from ..core.backend import TableClient
from .base import EntityService, Result
from .cache import QueryCache
from .storage import ObjectStorage, StorageError, object_key

logger = logging.getLogger(__name__)


class MediaLibraryService(EntityService):
    """Uploaded media, newest first. Bytes live in the object store."""

    table = "media_library"

    def __init__(self, backend: TableClient, cache: QueryCache, storage: ObjectStorage):
        super().__init__(backend, cache)
        self.storage = storage

    async def upload(
        self,
        file_name: str,
        data: bytes,
        mime_type: Optional[str] = None,
        **metadata: Any,
    ) -> Result[Any]:
        """Store the bytes, then record the returned URL as a media row."""
        key = object_key(file_name)
        try:
            url = await self.storage.put(key, data, mime_type)
        except StorageError as e:
            logger.warning("Media upload failed", extra={"file_name": file_name, "error": str(e)})
            self.error = str(e)
            return Result(error=str(e))

        result = await self.create({
            "file_name": file_name,
            "file_url": url,
            "storage_path": key,
            "mime_type": mime_type,
            "file_size_bytes": len(data),
            **metadata,
        })
        if not result.ok:
            await self._discard(key)
        return result

    async def delete(self, row_id: UUID) -> Result[bool]:
        """Delete the row first, then its stored object."""
        found = await self.get(row_id)
        result = await super().delete(row_id)
        item = found.data if found.ok else None
        if result.ok and result.data and item is not None and item.storage_path:
            await self._discard(item.storage_path)
        return result

    async def _discard(self, key: str) -> None:
        try:
            await self.storage.remove(key)
        except StorageError as e:
            logger.warning("Stored object left behind", extra={"key": key, "error": str(e)})
