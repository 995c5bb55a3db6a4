"""Repository protocol definitions (interfaces)."""

from stocktrade.repositories.protocols.catalog_store import CatalogStore
from stocktrade.repositories.protocols.transaction_store import TransactionStore

__all__ = [
    "CatalogStore",
    "TransactionStore",
]
