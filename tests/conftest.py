"""
Pytest configuration and fixtures for the stock trading service tests.

This module provides:
- A manual clock for TTL cache tests
- Time helpers for the service time zone
- A scripted fake stock vendor (pages and buy outcomes)
- Store, service and API client fixtures
"""

from datetime import datetime
from typing import Any, Optional

import pytest
import pytz
from fastapi.testclient import TestClient

from stocktrade.app_context import AppContext
from stocktrade.config.settings import Settings, reset_settings
from stocktrade.core.cache import TTLCache
from stocktrade.domain.models import BuyResult
from stocktrade.main import create_app
from stocktrade.repositories import CacheBackedStore
from stocktrade.services import (
    LedgerService,
    PortfolioService,
    ReportService,
    StockCatalogService,
    TradeExecutionService,
)


# =============================================================================
# TIMEZONE HELPERS
# =============================================================================

SERVICE_TZ = pytz.timezone("America/New_York")


def local_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in the service time zone."""
    return SERVICE_TZ.localize(datetime(year, month, day, hour, minute, second))


@pytest.fixture
def service_tz():
    return SERVICE_TZ


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return local_datetime(2024, 6, 15, 14, 30, 0)


# =============================================================================
# CACHE FIXTURES
# =============================================================================


class ManualClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def manual_clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def ttl_cache(manual_clock) -> TTLCache:
    """Provide a TTL cache driven by the manual clock."""
    return TTLCache(default_ttl_seconds=300, clock=manual_clock)


@pytest.fixture
def store(ttl_cache) -> CacheBackedStore:
    """Provide the cache-backed catalog/transaction store."""
    return CacheBackedStore(ttl_cache)


# =============================================================================
# VENDOR FIXTURES
# =============================================================================


def vendor_stock(symbol: str, price: float, name: Optional[str] = None) -> dict[str, Any]:
    return {"symbol": symbol, "name": name or f"{symbol} Inc.", "price": price, "currency": "USD"}


DEFAULT_PAGES: dict[Optional[str], dict[str, Any]] = {
    None: {
        "items": [vendor_stock("AAPL", 100.00, "Apple Inc."), vendor_stock("GOOGL", 142.75, "Alphabet Inc.")],
        "nextToken": "page-2",
    },
    "page-2": {
        "items": [vendor_stock("MSFT", 378.25, "Microsoft Corporation"), vendor_stock("TSLA", 248.75, "Tesla Inc.")],
        "nextToken": None,
    },
}


class FakeStockVendor:
    """
    Scripted stock vendor for testing.

    Pages are looked up by token; buy orders succeed unless ``buy_error`` is set.
    """

    def __init__(
        self,
        pages: Optional[dict[Optional[str], Any]] = None,
        buy_error: Optional[Exception] = None,
        transaction_ids: bool = True,
    ):
        self.pages = dict(DEFAULT_PAGES if pages is None else pages)
        self.buy_error = buy_error
        self.transaction_ids = transaction_ids
        self.page_calls: list[Optional[str]] = []
        self.buy_calls: list[tuple[str, float, int]] = []
        self.closed = False

    def get_stocks_page(self, next_token: Optional[str] = None) -> Any:
        self.page_calls.append(next_token)
        return self.pages[next_token]

    def buy_stock(self, symbol: str, price: float, quantity: int) -> BuyResult:
        self.buy_calls.append((symbol, price, quantity))
        if self.buy_error is not None:
            raise self.buy_error
        if not self.transaction_ids:
            return BuyResult()
        return BuyResult(transaction_id=f"vendor-txn-{len(self.buy_calls)}")

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_vendor() -> FakeStockVendor:
    """Provide the scripted vendor with the default two-page listing."""
    return FakeStockVendor()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def catalog_service(fake_vendor, store) -> StockCatalogService:
    """Provide test StockCatalogService."""
    return StockCatalogService(vendor=fake_vendor, store=store, cache_ttl_seconds=300)


@pytest.fixture
def ledger_service(store, service_tz) -> LedgerService:
    """Provide test LedgerService."""
    return LedgerService(transaction_store=store, tz=service_tz)


@pytest.fixture
def trade_service(catalog_service, fake_vendor, ledger_service, service_tz, fixed_now) -> TradeExecutionService:
    """Provide test TradeExecutionService with a frozen clock."""
    return TradeExecutionService(
        catalog=catalog_service,
        vendor=fake_vendor,
        ledger=ledger_service,
        max_deviation_percent=2.0,
        tz=service_tz,
        clock=lambda: fixed_now,
    )


@pytest.fixture
def portfolio_service(ledger_service, catalog_service, service_tz, fixed_now) -> PortfolioService:
    """Provide test PortfolioService."""
    return PortfolioService(
        ledger=ledger_service,
        catalog=catalog_service,
        tz=service_tz,
        clock=lambda: fixed_now,
    )


@pytest.fixture
def report_service(ledger_service, service_tz) -> ReportService:
    """Provide test ReportService."""
    return ReportService(ledger=ledger_service, tz=service_tz)


# =============================================================================
# API FIXTURES
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from any local .env file."""
    reset_settings()
    return Settings(
        _env_file=None,
        timezone="America/New_York",
        vendor_api_base_url="http://vendor.test",
        daily_report_enabled=False,
    )


@pytest.fixture
def app_context(test_settings, fake_vendor) -> AppContext:
    """Provide an AppContext wired to the fake vendor."""
    context = AppContext(settings=test_settings, vendor=fake_vendor)
    yield context
    context.clear()


@pytest.fixture
def client(app_context) -> TestClient:
    """Provide a test client running the app lifespan."""
    app = create_app(app_context)
    with TestClient(app) as test_client:
        yield test_client
