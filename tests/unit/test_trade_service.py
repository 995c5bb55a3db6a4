"""
Unit tests for the buy pipeline.

Tests cover:
- Deviation arithmetic and the inclusive threshold
- SUCCESS records carrying vendor ids, prices and deviation
- FAILED records for unknown symbols, price deviation and vendor errors
- Exactly one ledger record per attempt
- Retries through the HTTP client still producing a single record
"""

from unittest.mock import MagicMock

import pytest

from stocktrade.core.exceptions import (
    InternalError,
    NotFoundError,
    PriceDeviationExceededError,
    ValidationError,
    VendorApiError,
    VendorUnavailableError,
)
from stocktrade.domain.models import TransactionStatus
from stocktrade.providers import VendorClient
from stocktrade.services import LedgerService, TradeExecutionService, validate_price_deviation


# =============================================================================
# DEVIATION CHECK
# =============================================================================


class TestValidatePriceDeviation:
    """Deviation = |requested - current| / current * 100."""

    @pytest.mark.parametrize(
        "requested, current, display, valid",
        [
            (98, 100, "2.00", True),
            (102, 100, "2.00", True),
            (95, 100, "5.00", False),
            (100, 100, "0.00", True),
        ],
    )
    def test_examples(self, requested, current, display, valid):
        check = validate_price_deviation(requested, current, 2.0)

        assert check.deviation_display == display
        assert check.is_valid is valid
        assert check.max_allowed == 2.0

    def test_comparison_uses_full_precision(self):
        """
        GIVEN a deviation of 2.004%, displayed as "2.00"
        WHEN compared against a 2% maximum
        THEN the check fails
        """
        check = validate_price_deviation(102.004, 100, 2.0)

        assert check.deviation_display == "2.00"
        assert check.is_valid is False

    def test_non_positive_current_price(self):
        with pytest.raises(ValidationError):
            validate_price_deviation(10, 0, 2.0)


# =============================================================================
# BUY PIPELINE
# =============================================================================


class TestBuyStockSuccess:
    """Tests for accepted orders."""

    def test_records_success(
        self,
        trade_service: TradeExecutionService,
        ledger_service: LedgerService,
        fake_vendor,
        fixed_now,
    ):
        """
        GIVEN AAPL listed at 100.00
        WHEN user-1 buys 5 at 101.50
        THEN the vendor receives the order and one SUCCESS record is stored
        """
        txn = trade_service.buy_stock("user-1", "AAPL", 101.50, 5)

        assert fake_vendor.buy_calls == [("AAPL", 101.50, 5)]
        assert txn.status == TransactionStatus.SUCCESS
        assert txn.id == "vendor-txn-1"
        assert txn.name == "Apple Inc."
        assert txn.current_price == 100.00
        assert txn.requested_price == 101.50
        assert txn.deviation == "1.50"
        assert txn.timestamp == fixed_now
        assert ledger_service.query() == [txn]

    def test_generates_id_when_vendor_returns_none(
        self,
        trade_service: TradeExecutionService,
        fake_vendor,
    ):
        fake_vendor.transaction_ids = False

        txn = trade_service.buy_stock("user-1", "AAPL", 100.0, 1)

        assert txn.id
        assert txn.id != "None"


class TestBuyStockFailures:
    """Every failed attempt is recorded once and re-raised."""

    def test_unknown_symbol(
        self,
        trade_service: TradeExecutionService,
        ledger_service: LedgerService,
        fake_vendor,
    ):
        """
        GIVEN a symbol missing from the catalog
        WHEN a buy is placed
        THEN NotFoundError is raised, no order is sent, one FAILED record exists
        """
        with pytest.raises(NotFoundError):
            trade_service.buy_stock("user-1", "ZZZZ", 10.0, 1)

        assert fake_vendor.buy_calls == []
        records = ledger_service.query()
        assert len(records) == 1
        assert records[0].status == TransactionStatus.FAILED
        assert records[0].error_code == "NOT_FOUND"

    def test_price_deviation_exceeded(
        self,
        trade_service: TradeExecutionService,
        ledger_service: LedgerService,
        fake_vendor,
    ):
        with pytest.raises(PriceDeviationExceededError) as exc_info:
            trade_service.buy_stock("user-1", "AAPL", 95.0, 1)

        assert exc_info.value.details == {"deviation": "5.00", "maxAllowed": 2.0}
        assert fake_vendor.buy_calls == []
        [record] = ledger_service.query()
        assert record.status == TransactionStatus.FAILED
        assert record.error_code == "PRICE_DEVIATION_EXCEEDED"
        assert record.error_message.startswith("Price deviation of 5.00% exceeds maximum allowed 2.0%")

    def test_vendor_unavailable(
        self,
        trade_service: TradeExecutionService,
        ledger_service: LedgerService,
        fake_vendor,
    ):
        fake_vendor.buy_error = VendorUnavailableError()

        with pytest.raises(VendorUnavailableError):
            trade_service.buy_stock("user-1", "AAPL", 100.0, 1)

        [record] = ledger_service.query()
        assert record.status == TransactionStatus.FAILED
        assert record.error_code == "VENDOR_UNAVAILABLE"
        assert record.error_message == "Vendor API is not responding"

    def test_vendor_api_error(
        self,
        trade_service: TradeExecutionService,
        ledger_service: LedgerService,
        fake_vendor,
    ):
        fake_vendor.buy_error = VendorApiError("Market closed", status=409, code="MARKET_CLOSED")

        with pytest.raises(VendorApiError):
            trade_service.buy_stock("user-1", "AAPL", 100.0, 1)

        [record] = ledger_service.query()
        assert record.error_code == "MARKET_CLOSED"
        assert record.error_message == "Market closed"

    def test_unexpected_error_becomes_internal_error(
        self,
        trade_service: TradeExecutionService,
        ledger_service: LedgerService,
        fake_vendor,
    ):
        fake_vendor.buy_error = RuntimeError("boom")

        with pytest.raises(InternalError):
            trade_service.buy_stock("user-1", "AAPL", 100.0, 1)

        [record] = ledger_service.query()
        assert record.error_code == "INTERNAL_ERROR"

    def test_one_record_per_attempt(
        self,
        trade_service: TradeExecutionService,
        ledger_service: LedgerService,
    ):
        """
        GIVEN a mix of accepted and rejected orders
        WHEN four buys are attempted
        THEN the ledger holds four records in attempt order
        """
        trade_service.buy_stock("user-1", "AAPL", 100.0, 1)
        with pytest.raises(NotFoundError):
            trade_service.buy_stock("user-1", "NOPE", 1.0, 1)
        with pytest.raises(PriceDeviationExceededError):
            trade_service.buy_stock("user-2", "MSFT", 1.0, 1)
        trade_service.buy_stock("user-2", "MSFT", 378.25, 2)

        statuses = [r.status.value for r in ledger_service.query()]
        assert statuses == ["SUCCESS", "FAILED", "FAILED", "SUCCESS"]


# =============================================================================
# PIPELINE WITH HTTP CLIENT
# =============================================================================


def vendor_response(status_code: int, body) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body
    return response


class TestBuyStockThroughVendorClient:
    """The buy pipeline driving the real HTTP client over a mocked session."""

    @pytest.fixture
    def session(self) -> MagicMock:
        return MagicMock()

    @pytest.fixture
    def http_trade_service(
        self,
        catalog_service,
        ledger_service: LedgerService,
        session: MagicMock,
        service_tz,
        fixed_now,
    ) -> TradeExecutionService:
        vendor = VendorClient(
            "http://vendor.test",
            max_retries=3,
            session=session,
            sleep=lambda seconds: None,
        )
        return TradeExecutionService(
            catalog=catalog_service,
            vendor=vendor,
            ledger=ledger_service,
            max_deviation_percent=2.0,
            tz=service_tz,
            clock=lambda: fixed_now,
        )

    def test_transient_failures_retried_into_one_record(
        self,
        http_trade_service: TradeExecutionService,
        ledger_service: LedgerService,
        session: MagicMock,
    ):
        """
        GIVEN the vendor answers the buy with 503, 503, then 200
        WHEN a buy is placed
        THEN three requests are sent and exactly one SUCCESS record is stored
        """
        session.request.side_effect = [
            vendor_response(503, {"message": "busy"}),
            vendor_response(503, {"message": "busy"}),
            vendor_response(200, {"status": 200, "data": {"transactionId": "txn-9"}}),
        ]

        txn = http_trade_service.buy_stock("user-1", "AAPL", 100.0, 2)

        assert session.request.call_count == 3
        assert txn.id == "txn-9"
        [record] = ledger_service.query()
        assert record.status == TransactionStatus.SUCCESS
        assert record.id == "txn-9"

    def test_client_error_sent_once_and_recorded_failed(
        self,
        http_trade_service: TradeExecutionService,
        ledger_service: LedgerService,
        session: MagicMock,
    ):
        """
        GIVEN the vendor answers the buy with 404
        WHEN a buy is placed
        THEN one request is sent, VendorApiError is raised, one FAILED record is stored
        """
        session.request.return_value = vendor_response(
            404, {"message": "Stock not found", "code": "SYMBOL_NOT_FOUND"}
        )

        with pytest.raises(VendorApiError):
            http_trade_service.buy_stock("user-1", "AAPL", 100.0, 2)

        assert session.request.call_count == 1
        [record] = ledger_service.query()
        assert record.status == TransactionStatus.FAILED
        assert record.error_code == "SYMBOL_NOT_FOUND"
