"""API routers package."""

from stocktrade.api.routers.stocks import router as stocks_router
from stocktrade.api.routers.transactions import router as transactions_router
from stocktrade.api.routers.portfolio import router as portfolio_router

__all__ = [
    "stocks_router",
    "transactions_router",
    "portfolio_router",
]
