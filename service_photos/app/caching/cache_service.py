"""
Cache service contract consumed by the repository layer.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")

ValueFactory = Callable[[], Awaitable[T]]


class CacheService(ABC):
    """Defines a cache service.

    Callers own the key space: keys are opaque strings, usually built from the
    operation name plus its arguments. Values are held by reference.
    """

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry from the cache."""

    @abstractmethod
    def contains(self, cache_key: str) -> bool:
        """Return True if a live (non-expired) entry exists for ``cache_key``."""

    @abstractmethod
    async def get_or_insert(self, cache_key: str, factory: ValueFactory[T]) -> T:
        """Return the cached value for ``cache_key`` or resolve it with ``factory``.

        ``factory`` is only awaited when no live entry exists. Its result is
        stored and returned; if it raises, the exception reaches the caller
        unchanged and nothing is stored.
        """
