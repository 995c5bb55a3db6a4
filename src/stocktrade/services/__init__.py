"""Service layer - business logic orchestration."""

from stocktrade.services.catalog_service import StockCatalogService
from stocktrade.services.ledger_service import LedgerService
from stocktrade.services.trade_service import TradeExecutionService, validate_price_deviation
from stocktrade.services.portfolio_service import PortfolioService
from stocktrade.services.report_service import ReportService
from stocktrade.services.report_scheduler import DailyReportScheduler

__all__ = [
    "StockCatalogService",
    "LedgerService",
    "TradeExecutionService",
    "validate_price_deviation",
    "PortfolioService",
    "ReportService",
    "DailyReportScheduler",
]
