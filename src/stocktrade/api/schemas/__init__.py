"""Pydantic schemas for API request/response."""

from stocktrade.api.schemas.common import ApiResponse, ErrorBody, ErrorResponse
from stocktrade.api.schemas.stock import PaginationMeta, StockPageResponse, StockResponse
from stocktrade.api.schemas.transaction import (
    BuyOrderEnvelope,
    BuyOrderRequest,
    BuyOrderResponse,
    TransactionListResponse,
    TransactionResponse,
)
from stocktrade.api.schemas.portfolio import HoldingResponse, PortfolioResponse

__all__ = [
    "ApiResponse",
    "ErrorBody",
    "ErrorResponse",
    "PaginationMeta",
    "StockPageResponse",
    "StockResponse",
    "BuyOrderEnvelope",
    "BuyOrderRequest",
    "BuyOrderResponse",
    "TransactionListResponse",
    "TransactionResponse",
    "HoldingResponse",
    "PortfolioResponse",
]
