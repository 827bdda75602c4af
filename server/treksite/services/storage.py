"""Binary object storage for media uploads."""

import asyncio
import logging
import re
import uuid
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """The object store rejected a read or write."""


class ObjectStorage(Protocol):
    async def put(self, key: str, data: bytes, content_type: str | None = None) -> str: ...

    async def remove(self, key: str) -> None: ...


def object_key(file_name: str) -> str:
    """Unique storage key that keeps a sanitized version of the original name."""
    stem = re.sub(r"[^A-Za-z0-9._-]+", "-", Path(file_name).name).strip("-.") or "upload"
    return f"{uuid.uuid4().hex}-{stem}"


class LocalObjectStorage:
    """Stores objects as files under a root directory, served from a base URL."""

    def __init__(self, root: str, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def _path(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root.resolve() not in path.parents:
            raise StorageError(f"Key '{key}' escapes the storage root")
        return path

    def url_for(self, key: str) -> str:
        return f"{self.base_url}/{key}"

    def _write(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    async def put(self, key: str, data: bytes, content_type: str | None = None) -> str:
        """Write bytes and return their public URL."""
        path = self._path(key)
        try:
            await asyncio.to_thread(self._write, path, data)
        except OSError as e:
            raise StorageError(f"Failed to store '{key}': {e.strerror or e}") from e

        logger.info(
            "Object stored",
            extra={"key": key, "size": len(data), "content_type": content_type}
        )
        return self.url_for(key)

    async def remove(self, key: str) -> None:
        path = self._path(key)
        try:
            await asyncio.to_thread(path.unlink, True)
        except OSError as e:
            raise StorageError(f"Failed to remove '{key}': {e.strerror or e}") from e
