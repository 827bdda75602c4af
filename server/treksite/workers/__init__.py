"""Background workers."""

from .cache_refresh_worker import CacheRefreshWorker

__all__ = ["CacheRefreshWorker"]
