"""
Photo service caching package.

Keeps repeated document-store reads off the hot path. Only reads go through
the cache; writes never invalidate, so a cached value can be up to one
expiration period stale.
"""

from .cache_service import CacheService
from .memory_cache import DEFAULT_EXPIRATION, CacheEntry, MemoryCacheService

__all__ = ["CacheService", "CacheEntry", "MemoryCacheService", "DEFAULT_EXPIRATION"]
