"""TransactionRecord domain model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from stocktrade.domain.models.enums import TransactionStatus


@dataclass(frozen=True)
class TransactionRecord:
    """
    Ledger entry for one buy attempt (source of truth for holdings and reports).

    - SUCCESS records carry name, current_price and deviation
    - FAILED records carry error_message and error_code
    - Prices are copied at trade time, so later catalog changes never alter history
    """

    id: str
    user_id: str
    symbol: str
    quantity: int
    requested_price: float
    status: TransactionStatus
    timestamp: datetime
    name: Optional[str] = None
    current_price: Optional[float] = None
    deviation: Optional[str] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.status, str):
            object.__setattr__(self, "status", TransactionStatus(self.status))

    @property
    def is_success(self) -> bool:
        return self.status == TransactionStatus.SUCCESS

    @property
    def total(self) -> float:
        """Order value at the requested price."""
        return self.quantity * self.requested_price

    def to_dict(self) -> dict:
        """JSON-friendly representation (camelCase, ISO timestamp)."""
        data = {
            "id": self.id,
            "userId": self.user_id,
            "symbol": self.symbol,
            "quantity": self.quantity,
            "requestedPrice": self.requested_price,
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.is_success:
            data.update(
                name=self.name,
                currentPrice=self.current_price,
                deviation=self.deviation,
            )
        else:
            data.update(error=self.error_message, errorCode=self.error_code)
        return data
