"""Repository layer - data access abstractions and implementations."""

from stocktrade.repositories.protocols import (
    CatalogStore,
    TransactionStore,
)
from stocktrade.repositories.memory import CacheBackedStore

__all__ = [
    "CatalogStore",
    "TransactionStore",
    "CacheBackedStore",
]
