"""Stub stock vendor for offline/testing use."""

import uuid
from typing import Any, Optional

from stocktrade.core.exceptions import VendorApiError
from stocktrade.domain.models import BuyResult


# Deterministic fake listing
_STUB_STOCKS: list[dict[str, Any]] = [
    {"symbol": "AAPL", "name": "Apple Inc.", "price": 185.50, "currency": "USD"},
    {"symbol": "GOOGL", "name": "Alphabet Inc.", "price": 142.75, "currency": "USD"},
    {"symbol": "MSFT", "name": "Microsoft Corporation", "price": 378.25, "currency": "USD"},
    {"symbol": "AMZN", "name": "Amazon.com Inc.", "price": 178.50, "currency": "USD"},
    {"symbol": "TSLA", "name": "Tesla Inc.", "price": 248.75, "currency": "USD"},
    {"symbol": "NVDA", "name": "NVIDIA Corporation", "price": 485.25, "currency": "USD"},
    {"symbol": "META", "name": "Meta Platforms Inc.", "price": 505.50, "currency": "USD"},
    {"symbol": "SPY", "name": "SPDR S&P 500 ETF", "price": 485.25, "currency": "USD"},
]


class StubStockVendor:
    """
    In-process vendor with a fixed listing for offline operation.

    Pages the listing ``page_size`` items at a time using the item offset as token.
    Buy orders always succeed for listed symbols.
    """

    def __init__(self, stocks: Optional[list[dict[str, Any]]] = None, page_size: int = 3):
        self._stocks = list(stocks if stocks is not None else _STUB_STOCKS)
        self._page_size = max(1, page_size)

    def get_stocks_page(self, next_token: Optional[str] = None) -> dict[str, Any]:
        start = int(next_token) if next_token else 0
        end = start + self._page_size
        return {
            "items": [dict(item) for item in self._stocks[start:end]],
            "nextToken": str(end) if end < len(self._stocks) else None,
        }

    def buy_stock(self, symbol: str, price: float, quantity: int) -> BuyResult:
        if not any(item["symbol"] == symbol for item in self._stocks):
            raise VendorApiError(f"Unknown symbol {symbol}", status=404, code="SYMBOL_NOT_FOUND")
        return BuyResult(transaction_id=f"stub-{uuid.uuid4().hex[:12]}")

    def close(self) -> None:
        """Nothing to release."""
