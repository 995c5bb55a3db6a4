"""Domain layer - pure business models with no external dependencies."""

from stocktrade.domain.models import (
    TransactionStatus,
    Instrument,
    TransactionRecord,
    BuyResult,
    PriceDeviationCheck,
)

__all__ = [
    "TransactionStatus",
    "Instrument",
    "TransactionRecord",
    "BuyResult",
    "PriceDeviationCheck",
]
