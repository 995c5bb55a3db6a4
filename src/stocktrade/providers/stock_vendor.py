"""Stock vendor protocol."""

from typing import Any, Optional, Protocol

from stocktrade.domain.models import BuyResult


class StockVendor(Protocol):
    """
    Protocol for the upstream price and order vendor.

    Implementations raise VendorUnavailableError / VendorApiError on failure.
    """

    def get_stocks_page(self, next_token: Optional[str] = None) -> dict[str, Any]:
        """
        Fetch one page of the instrument list.

        Returns the vendor ``data`` payload: {"items": [...], "nextToken": str | None}.
        The payload is not validated here; the catalog decides what a usable page is.
        """
        ...

    def buy_stock(self, symbol: str, price: float, quantity: int) -> BuyResult:
        """Place a buy order at ``price`` and return the vendor acknowledgement."""
        ...

    def close(self) -> None:
        """Release connections and cancel pending retries."""
        ...
