"""
In-memory cache service with absolute expiration.
"""

import asyncio
import math
import threading
import time
from contextlib import nullcontext
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Callable, Dict, Optional, Union

from shared.config import BaseConfig
from shared.logging import bound_cache_key, get_logger
from shared.metrics import MetricsCollector

from .cache_service import CacheService, T, ValueFactory


DEFAULT_EXPIRATION = timedelta(minutes=20)
CACHE_TYPE = "memory"

_MISSING = object()


@dataclass
class CacheEntry:
    """A cached value and the clock readings that bound its lifetime."""

    value: Any
    created_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


@dataclass
class _KeyLock:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0


class MemoryCacheService(CacheService):
    """Process-local cache-aside store.

    Every entry expires ``expiration_duration`` after it was inserted. Expired
    entries are evicted lazily when their key is touched again, by
    :meth:`purge_expired`, or by :meth:`clear`; nothing runs in the background.

    By default concurrent misses on the same key each await their own factory
    and the last write wins. With ``single_flight=True`` misses on one key are
    serialized, so the factory runs once and the other callers read its result.
    """

    def __init__(
        self,
        expiration_duration: Union[timedelta, float] = DEFAULT_EXPIRATION,
        *,
        single_flight: bool = False,
        clock: Callable[[], float] = time.monotonic,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.logger = get_logger("photos.cache.memory")
        self.metrics = metrics
        self.single_flight = single_flight
        self.expiration_duration = expiration_duration

        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._key_locks: Dict[str, _KeyLock] = {}

    @classmethod
    def from_config(cls, config: BaseConfig, metrics: Optional[MetricsCollector] = None) -> "MemoryCacheService":
        """Create a cache from service settings."""
        return cls(
            timedelta(seconds=config.cache_expiration_seconds),
            single_flight=config.cache_single_flight,
            metrics=metrics,
        )

    @property
    def expiration_duration(self) -> timedelta:
        """Lifetime applied to entries inserted from now on."""
        return self._expiration_duration

    @expiration_duration.setter
    def expiration_duration(self, value: Union[timedelta, float]) -> None:
        if not isinstance(value, timedelta):
            if not math.isfinite(value):
                raise ValueError("Expiration duration must be finite.")
            value = timedelta(seconds=value)
        if value <= timedelta(0):
            raise ValueError("Expiration duration must be positive.")
        self._expiration_duration = value

    @property
    def size(self) -> int:
        """Number of resident entries, including expired ones not yet evicted."""
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()

        self.logger.info("Cache cleared", entries_removed=removed)
        self._report_size(0)

    def contains(self, cache_key: str) -> bool:
        return self._lookup(cache_key) is not _MISSING

    async def get_or_insert(self, cache_key: str, factory: ValueFactory[T]) -> T:
        value = self._lookup(cache_key)
        if value is not _MISSING:
            self._record_hit(cache_key)
            return value

        if self.single_flight:
            return await self._insert_coalesced(cache_key, factory)
        return await self._insert(cache_key, factory)

    def purge_expired(self) -> int:
        """Remove every expired entry and return how many were removed."""
        now = self._clock()
        with self._lock:
            expired_keys = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired_keys:
                del self._entries[key]
            remaining = len(self._entries)

        if expired_keys:
            self.logger.info("Purged expired cache entries", count=len(expired_keys))
        self._report_size(remaining)
        return len(expired_keys)

    def _lookup(self, cache_key: str) -> Any:
        """Return the live value for ``cache_key`` or ``_MISSING``."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(cache_key)
            if entry is None:
                return _MISSING
            if entry.is_expired(now):
                del self._entries[cache_key]
                return _MISSING
            return entry.value

    async def _insert(self, cache_key: str, factory: ValueFactory[T]) -> T:
        self.logger.debug("Cache miss", cache_key=cache_key)
        if self.metrics:
            self.metrics.record_cache_miss(CACHE_TYPE)

        timer = (
            self.metrics.time_operation("cache_factory_duration_seconds", cache_type=CACHE_TYPE)
            if self.metrics else nullcontext()
        )
        try:
            with timer, bound_cache_key(cache_key):
                value = await factory()
        except Exception as e:
            self.logger.warning("Cache factory failed", cache_key=cache_key, error=str(e))
            if self.metrics:
                self.metrics.record_cache_factory_failure(CACHE_TYPE)
            raise

        # None cannot be told apart from absence
        if value is None:
            self.logger.debug("Cache factory returned None, not stored", cache_key=cache_key)
            return value

        now = self._clock()
        entry = CacheEntry(
            value=value,
            created_at=now,
            expires_at=now + self._expiration_duration.total_seconds(),
        )
        with self._lock:
            self._entries[cache_key] = entry
            size = len(self._entries)

        self._report_size(size)
        return value

    async def _insert_coalesced(self, cache_key: str, factory: ValueFactory[T]) -> T:
        key_lock = self._key_locks.get(cache_key)
        if key_lock is None:
            key_lock = self._key_locks[cache_key] = _KeyLock()
        key_lock.users += 1

        try:
            async with key_lock.lock:
                # The previous holder may have stored the value while we waited
                value = self._lookup(cache_key)
                if value is not _MISSING:
                    self._record_hit(cache_key)
                    return value
                return await self._insert(cache_key, factory)
        finally:
            key_lock.users -= 1
            if key_lock.users == 0:
                self._key_locks.pop(cache_key, None)

    def _record_hit(self, cache_key: str) -> None:
        self.logger.debug("Cache hit", cache_key=cache_key)
        if self.metrics:
            self.metrics.record_cache_hit(CACHE_TYPE)

    def _report_size(self, size: int) -> None:
        if self.metrics:
            self.metrics.set_cache_entries(CACHE_TYPE, size)
