"""View models for service outputs."""

from stocktrade.domain.views.portfolio import Holding, PortfolioView
from stocktrade.domain.views.report import ReportStats, UserActivity, DailyReport

__all__ = [
    "Holding",
    "PortfolioView",
    "ReportStats",
    "UserActivity",
    "DailyReport",
]
