"""Transaction store protocol."""

from datetime import datetime
from typing import Protocol, Optional

from stocktrade.domain.models import TransactionRecord, TransactionStatus


class TransactionStore(Protocol):
    """Interface for the append-only transaction ledger."""

    def append_transaction(self, transaction: TransactionRecord) -> TransactionRecord:
        """Append a record; never mutates earlier ones."""
        ...

    def query_transactions(
        self,
        user_id: Optional[str] = None,
        status: Optional[TransactionStatus] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[TransactionRecord]:
        """Records matching every given filter, in insertion order."""
        ...

    def clear_transactions(self) -> None:
        """Remove every record (test isolation only)."""
        ...
