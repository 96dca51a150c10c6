"""Cache infrastructure module."""

from clarity.infrastructure.cache.bounded_cache import BoundedCache, CacheEntry

__all__ = [
    "BoundedCache",
    "CacheEntry",
]
