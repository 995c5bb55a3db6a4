"""Dependency injection for FastAPI."""

from fastapi import Request

from stocktrade.app_context import AppContext
from stocktrade.services import (
    LedgerService,
    PortfolioService,
    StockCatalogService,
    TradeExecutionService,
)


def get_context(request: Request) -> AppContext:
    """Provide the AppContext created by the application factory."""
    return request.app.state.context


def get_catalog_service(request: Request) -> StockCatalogService:
    """Provide StockCatalogService instance."""
    return get_context(request).catalog


def get_trade_service(request: Request) -> TradeExecutionService:
    """Provide TradeExecutionService instance."""
    return get_context(request).trading


def get_ledger_service(request: Request) -> LedgerService:
    """Provide LedgerService instance."""
    return get_context(request).ledger


def get_portfolio_service(request: Request) -> PortfolioService:
    """Provide PortfolioService instance."""
    return get_context(request).portfolio
