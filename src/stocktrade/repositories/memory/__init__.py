"""In-memory repository implementations."""

from stocktrade.repositories.memory.store import CacheBackedStore

__all__ = [
    "CacheBackedStore",
]
