"""Domain models package."""

from stocktrade.domain.models.enums import TransactionStatus
from stocktrade.domain.models.instrument import Instrument
from stocktrade.domain.models.transaction import TransactionRecord
from stocktrade.domain.models.order import BuyResult, PriceDeviationCheck

__all__ = [
    "TransactionStatus",
    "Instrument",
    "TransactionRecord",
    "BuyResult",
    "PriceDeviationCheck",
]
