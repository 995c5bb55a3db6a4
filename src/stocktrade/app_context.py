"""Application context for in-process service management.

Builds the cache, stores, vendor client and services once per process and
hands them to the FastAPI layer (``app.state.context``) and to tests.
"""

import logging
from typing import Optional

from stocktrade.config.settings import Settings, get_settings
from stocktrade.core.cache import TTLCache
from stocktrade.core.timezone import resolve_timezone
from stocktrade.notify import EmailSender
from stocktrade.providers import StockVendor, StubStockVendor, VendorClient
from stocktrade.repositories import CacheBackedStore
from stocktrade.services import (
    DailyReportScheduler,
    LedgerService,
    PortfolioService,
    ReportService,
    StockCatalogService,
    TradeExecutionService,
)

logger = logging.getLogger(__name__)


class AppContext:
    """
    Application context providing access to all services.

    Args:
        settings: Configuration; defaults to the global settings.
        vendor: Optional vendor override (tests). Otherwise a VendorClient,
            or the stub listing when ``vendor_stub`` is set.
        cache: Optional cache override (tests use a manual clock).
        email_sender: Optional sender override.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        vendor: Optional[StockVendor] = None,
        cache: Optional[TTLCache] = None,
        email_sender: Optional[EmailSender] = None,
    ):
        self.settings = settings or get_settings()
        self.tz = resolve_timezone(self.settings.timezone)

        self.cache = cache or TTLCache(default_ttl_seconds=self.settings.cache_ttl_seconds)
        self.store = CacheBackedStore(self.cache)
        self.vendor = vendor or self._build_vendor()

        self.catalog = StockCatalogService(
            vendor=self.vendor,
            store=self.store,
            cache_ttl_seconds=self.settings.cache_ttl_seconds,
        )
        self.ledger = LedgerService(transaction_store=self.store, tz=self.tz)
        self.trading = TradeExecutionService(
            catalog=self.catalog,
            vendor=self.vendor,
            ledger=self.ledger,
            max_deviation_percent=self.settings.max_price_deviation_percent,
            tz=self.tz,
        )
        self.portfolio = PortfolioService(ledger=self.ledger, catalog=self.catalog, tz=self.tz)
        self.reports = ReportService(ledger=self.ledger, tz=self.tz)
        self.email_sender = email_sender or EmailSender.from_settings(self.settings)

        self._scheduler: Optional[DailyReportScheduler] = None

    def _build_vendor(self) -> StockVendor:
        if self.settings.vendor_stub:
            logger.info("Using stub stock vendor")
            return StubStockVendor()
        return VendorClient(
            base_url=self.settings.vendor_api_base_url,
            api_key=self.settings.vendor_api_key,
            timeout_sec=self.settings.api_timeout_seconds,
            max_retries=self.settings.api_retry_attempts,
            base_delay_sec=self.settings.api_retry_base_delay_seconds,
        )

    @property
    def scheduler(self) -> Optional[DailyReportScheduler]:
        return self._scheduler

    def start_scheduler(self) -> Optional[DailyReportScheduler]:
        """Start the daily report thread if enabled and email is configured."""
        if not self.settings.daily_report_enabled:
            return None
        if not self.email_sender.is_configured:
            logger.warning("Daily report enabled but email is not configured; scheduler not started")
            return None
        if self._scheduler is None:
            self._scheduler = DailyReportScheduler(
                report_service=self.reports,
                email_sender=self.email_sender,
                run_at=self.settings.daily_report_time,
                tz=self.tz,
            )
        self._scheduler.start()
        return self._scheduler

    def clear(self) -> None:
        """Drop cached stocks and every ledger record (tests only)."""
        self.cache.clear()
        self.ledger.clear()

    def close(self) -> None:
        """Stop background work and release the vendor connection."""
        if self._scheduler is not None:
            self._scheduler.stop()
            self._scheduler = None
        self.vendor.close()
