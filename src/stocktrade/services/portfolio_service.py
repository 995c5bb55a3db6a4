"""Portfolio service for deriving holdings from the ledger."""

import logging
from collections import defaultdict
from datetime import datetime, tzinfo
from typing import Callable, Optional

from stocktrade.core.timezone import now_in, resolve_timezone
from stocktrade.domain.models import TransactionStatus
from stocktrade.domain.views import Holding, PortfolioView
from stocktrade.services.catalog_service import StockCatalogService
from stocktrade.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


class PortfolioService:
    """
    Computes user holdings by replaying SUCCESS transactions.

    Holdings are never stored; they are always derived from the ledger, then
    valued at the current catalog price. Symbols no longer listed are skipped.
    """

    def __init__(
        self,
        ledger: LedgerService,
        catalog: StockCatalogService,
        tz: Optional[tzinfo] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._ledger = ledger
        self._catalog = catalog
        tz = tz or resolve_timezone()
        self._clock = clock or (lambda: now_in(tz))

    def get_holdings(self, user_id: str) -> dict[str, int]:
        """Share count per symbol from the user's successful buys."""
        quantities: dict[str, int] = defaultdict(int)
        for txn in self._ledger.query(user_id=user_id, status=TransactionStatus.SUCCESS):
            quantities[txn.symbol] += txn.quantity
        return dict(quantities)

    def get_user_portfolio(self, user_id: str) -> PortfolioView:
        """Holdings valued at catalog prices, largest position first."""
        quantities = self.get_holdings(user_id)
        stocks = {stock.symbol: stock for stock in self._catalog.get_all_stocks()}

        portfolio = PortfolioView(user_id=user_id, last_updated=self._clock())
        for symbol, quantity in quantities.items():
            stock = stocks.get(symbol)
            if stock is None:
                continue
            holding = Holding(
                symbol=symbol,
                name=stock.name,
                quantity=quantity,
                current_price=stock.price,
                total_value=quantity * stock.price,
                currency=stock.currency,
            )
            portfolio.holdings.append(holding)
            portfolio.total_value += holding.total_value

        portfolio.holdings.sort(key=lambda h: h.total_value, reverse=True)

        logger.info(
            "Retrieved portfolio for user %s (holdings=%d total_value=%.2f)",
            user_id,
            len(portfolio.holdings),
            portfolio.total_value,
        )
        return portfolio

    def get_portfolio_summary(self, user_id: str, top: int = 5) -> dict:
        """Compact summary used by reports: totals plus the largest holdings."""
        portfolio = self.get_user_portfolio(user_id)
        total = portfolio.total_value
        return {
            "userId": user_id,
            "totalHoldings": len(portfolio.holdings),
            "totalValue": total,
            "topHoldings": [
                {
                    "symbol": h.symbol,
                    "value": h.total_value,
                    "percentage": f"{(h.total_value / total * 100) if total else 0:.2f}",
                }
                for h in portfolio.holdings[:top]
            ],
        }
