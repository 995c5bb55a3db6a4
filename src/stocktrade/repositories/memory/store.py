"""In-memory catalog and transaction store backed by the TTL cache."""

import threading
from datetime import datetime
from typing import Optional

from stocktrade.core.cache import TTLCache
from stocktrade.domain.models import Instrument, TransactionRecord, TransactionStatus

_CATALOG_KEY = "all_stocks"
_TRANSACTIONS_KEY = "transactions"


class CacheBackedStore:
    """
    Implements CatalogStore and TransactionStore on top of one TTLCache.

    Both values are immutable tuples replaced as a whole, so readers always see
    a complete snapshot. Ledger appends are serialized by ``_append_lock``;
    the transactions key never expires.
    """

    def __init__(self, cache: TTLCache):
        self._cache = cache
        self._append_lock = threading.Lock()

    @property
    def cache(self) -> TTLCache:
        return self._cache

    # Catalog operations
    def get_catalog(self) -> Optional[list[Instrument]]:
        snapshot = self._cache.get(_CATALOG_KEY)
        if snapshot is None:
            return None
        return list(snapshot)

    def set_catalog(self, instruments: list[Instrument], ttl_seconds: float) -> None:
        self._cache.set(_CATALOG_KEY, tuple(instruments), ttl_seconds)

    def invalidate_catalog(self) -> None:
        self._cache.delete(_CATALOG_KEY)

    # Transaction operations
    def append_transaction(self, transaction: TransactionRecord) -> TransactionRecord:
        with self._append_lock:
            current = self._cache.get(_TRANSACTIONS_KEY, ())
            self._cache.set(_TRANSACTIONS_KEY, current + (transaction,), None)
        return transaction

    def query_transactions(
        self,
        user_id: Optional[str] = None,
        status: Optional[TransactionStatus] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[TransactionRecord]:
        records = self._cache.get(_TRANSACTIONS_KEY, ())
        return [
            txn
            for txn in records
            if (user_id is None or txn.user_id == user_id)
            and (status is None or txn.status == status)
            and (start is None or txn.timestamp >= start)
            and (end is None or txn.timestamp <= end)
        ]

    def clear_transactions(self) -> None:
        with self._append_lock:
            self._cache.delete(_TRANSACTIONS_KEY)
