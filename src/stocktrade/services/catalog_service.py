"""Stock catalog service: the merged, cached instrument list."""

import logging
from typing import Any, Optional

from stocktrade.core.exceptions import NotFoundError
from stocktrade.domain.models import Instrument
from stocktrade.providers.stock_vendor import StockVendor
from stocktrade.repositories.protocols import CatalogStore

logger = logging.getLogger(__name__)


class StockCatalogService:
    """
    Service for the list of tradable instruments.

    Pages through the vendor listing and caches the merged snapshot for
    ``cache_ttl_seconds``. A malformed page ends pagination early; the
    instruments collected up to that point are kept.
    """

    def __init__(
        self,
        vendor: StockVendor,
        store: CatalogStore,
        cache_ttl_seconds: float = 300,
    ):
        self._vendor = vendor
        self._store = store
        self._cache_ttl = cache_ttl_seconds

    def get_all_stocks(self) -> list[Instrument]:
        """Return the cached snapshot, fetching every vendor page on a miss."""
        cached = self._store.get_catalog()
        if cached is not None:
            logger.debug("Returning cached stocks")
            return cached

        stocks = self._fetch_all_pages()
        self._store.set_catalog(stocks, self._cache_ttl)
        return stocks

    def get_stock_by_symbol(self, symbol: str) -> Instrument:
        """Exact, case-sensitive lookup. Callers normalize case."""
        for stock in self.get_all_stocks():
            if stock.symbol == symbol:
                return stock
        raise NotFoundError("Stock", symbol)

    def refresh(self) -> list[Instrument]:
        """Discard the cached snapshot and rebuild it."""
        self._store.invalidate_catalog()
        return self.get_all_stocks()

    def _fetch_all_pages(self) -> list[Instrument]:
        stocks: list[Instrument] = []
        next_token = None
        page_count = 0

        while True:
            logger.info("Fetching stocks page %d", page_count + 1)
            page = self._vendor.get_stocks_page(next_token)
            items = self._parse_page(page)
            if items is None:
                logger.warning("Invalid response structure from vendor API")
                break
            stocks.extend(items)
            page_count += 1
            next_token = page.get("nextToken")
            if not next_token:
                break

        logger.info("Fetched %d stocks in %d pages", len(stocks), page_count)
        return stocks

    @staticmethod
    def _parse_page(page: Any) -> Optional[list[Instrument]]:
        """Instruments of a page, or None if the page is structurally invalid."""
        if not isinstance(page, dict) or not isinstance(page.get("items"), list):
            return None
        try:
            return [Instrument.from_vendor(item) for item in page["items"]]
        except (TypeError, ValueError) as exc:
            logger.warning("Unusable instrument in vendor page: %s", exc)
            return None
