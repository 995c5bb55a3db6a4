"""Pydantic schemas for transaction endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from stocktrade.api.schemas.common import ApiResponse, CamelModel
from stocktrade.domain.models import TransactionRecord, TransactionStatus


class BuyOrderRequest(CamelModel):
    """Request schema for a buy order."""

    user_id: str = Field(..., min_length=1, max_length=50, description="User placing the order")
    symbol: str = Field(..., min_length=1, max_length=10, description="Stock symbol")
    price: float = Field(..., gt=0, allow_inf_nan=False, description="Requested price per share")
    quantity: int = Field(..., ge=1, description="Number of shares")

    @field_validator("symbol")
    @classmethod
    def uppercase_symbol(cls, v: str) -> str:
        return v.upper()

    @field_validator("price")
    @classmethod
    def at_most_two_decimals(cls, v: float) -> float:
        exponent = Decimal(str(v)).as_tuple().exponent
        if not isinstance(exponent, int) or exponent < -2:
            raise ValueError("price must have at most 2 decimal places")
        return v


class BuyOrderResponse(CamelModel):
    """Response schema for an executed buy order."""

    transaction_id: str
    symbol: str
    quantity: int
    price: float
    total: float
    status: TransactionStatus
    timestamp: datetime

    @classmethod
    def from_record(cls, txn: TransactionRecord) -> "BuyOrderResponse":
        return cls(
            transaction_id=txn.id,
            symbol=txn.symbol,
            quantity=txn.quantity,
            price=txn.requested_price,
            total=txn.total,
            status=txn.status,
            timestamp=txn.timestamp,
        )


class TransactionResponse(CamelModel):
    """Response schema for a ledger entry."""

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
    error: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def from_record(cls, txn: TransactionRecord) -> "TransactionResponse":
        return cls(
            id=txn.id,
            user_id=txn.user_id,
            symbol=txn.symbol,
            quantity=txn.quantity,
            requested_price=txn.requested_price,
            status=txn.status,
            timestamp=txn.timestamp,
            name=txn.name,
            current_price=txn.current_price,
            deviation=txn.deviation,
            error=txn.error_message,
            error_code=txn.error_code,
        )


class TransactionListResponse(CamelModel):
    items: list[TransactionResponse]
    total: int


class BuyOrderEnvelope(ApiResponse[BuyOrderResponse]):
    status: int = 201
    message: str = "Stock purchase completed successfully"
