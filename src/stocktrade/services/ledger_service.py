"""Ledger service for transaction records."""

import logging
from datetime import date, tzinfo
from typing import Optional, Union

from stocktrade.core.timezone import day_bounds, resolve_timezone
from stocktrade.domain.models import TransactionRecord, TransactionStatus
from stocktrade.repositories.protocols import TransactionStore

logger = logging.getLogger(__name__)


class LedgerService:
    """
    Service for the append-only transaction ledger.

    Records are never edited or removed; ``clear()`` exists for test isolation.
    Date filters use the service time zone.
    """

    def __init__(
        self,
        transaction_store: TransactionStore,
        tz: Optional[tzinfo] = None,
    ):
        self._store = transaction_store
        self._tz = tz or resolve_timezone()

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def record(self, transaction: TransactionRecord) -> TransactionRecord:
        """Append a transaction to the ledger."""
        self._store.append_transaction(transaction)
        logger.info(
            "Transaction recorded: %s - %s (transaction_id=%s user_id=%s)",
            transaction.status.value,
            transaction.symbol,
            transaction.id,
            transaction.user_id,
        )
        return transaction

    def query(
        self,
        user_id: Optional[str] = None,
        status: Optional[Union[TransactionStatus, str]] = None,
        on_date: Optional[date] = None,
    ) -> list[TransactionRecord]:
        """Transactions matching all given filters, oldest first."""
        if isinstance(status, str):
            status = TransactionStatus(status)

        start = end = None
        if on_date is not None:
            start, end = day_bounds(on_date, self._tz)

        return self._store.query_transactions(
            user_id=user_id,
            status=status,
            start=start,
            end=end,
        )

    def clear(self) -> None:
        """Remove every record (tests only)."""
        self._store.clear_transactions()
