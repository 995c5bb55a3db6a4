"""Trade execution service: the buy pipeline."""

import logging
import uuid
from datetime import datetime, tzinfo
from typing import Callable, Optional

from stocktrade.core.exceptions import (
    AppError,
    InternalError,
    PriceDeviationExceededError,
    ValidationError,
)
from stocktrade.core.timezone import now_in, resolve_timezone
from stocktrade.domain.models import (
    PriceDeviationCheck,
    TransactionRecord,
    TransactionStatus,
)
from stocktrade.providers.stock_vendor import StockVendor
from stocktrade.services.catalog_service import StockCatalogService
from stocktrade.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


def validate_price_deviation(
    requested_price: float,
    current_price: float,
    max_deviation_percent: float,
) -> PriceDeviationCheck:
    """
    Compare a requested price with the current price.

    deviation = |requested - current| / current * 100; the check passes when
    deviation <= max_deviation_percent, compared at full precision.
    """
    if current_price <= 0:
        raise ValidationError(f"Current price must be positive, got {current_price}")
    deviation = abs((requested_price - current_price) / current_price * 100)
    logger.debug(
        "Price deviation check: requested=%s, current=%s, deviation=%.2f%%",
        requested_price,
        current_price,
        deviation,
    )
    return PriceDeviationCheck(
        deviation=deviation,
        max_allowed=max_deviation_percent,
        is_valid=deviation <= max_deviation_percent,
    )


class TradeExecutionService:
    """
    Executes buy orders against the vendor and records every attempt.

    Each call to ``buy_stock`` appends exactly one TransactionRecord: SUCCESS
    when the vendor accepts the order, FAILED for an unknown symbol, a price
    outside the allowed deviation, or a vendor error. Failures are re-raised
    after they are recorded.

    The deviation check uses the catalog price at request time and is not
    repeated after the vendor fills the order.
    """

    def __init__(
        self,
        catalog: StockCatalogService,
        vendor: StockVendor,
        ledger: LedgerService,
        max_deviation_percent: float = 2.0,
        tz: Optional[tzinfo] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._catalog = catalog
        self._vendor = vendor
        self._ledger = ledger
        self._max_deviation = max_deviation_percent
        tz = tz or resolve_timezone()
        self._clock = clock or (lambda: now_in(tz))

    @property
    def max_deviation_percent(self) -> float:
        return self._max_deviation

    def validate_price(self, requested_price: float, current_price: float) -> PriceDeviationCheck:
        """Deviation check with the configured maximum."""
        return validate_price_deviation(requested_price, current_price, self._max_deviation)

    def buy_stock(
        self,
        user_id: str,
        symbol: str,
        requested_price: float,
        quantity: int,
    ) -> TransactionRecord:
        """
        Run the buy pipeline for one order.

        Returns the SUCCESS record; raises the failure (NotFoundError,
        PriceDeviationExceededError, VendorError, ...) after recording it.
        """
        try:
            stock = self._catalog.get_stock_by_symbol(symbol)
            check = self.validate_price(requested_price, stock.price)
            if not check.is_valid:
                raise PriceDeviationExceededError(
                    deviation=check.deviation_display,
                    max_allowed=check.max_allowed,
                    current_price=stock.price,
                    requested_price=requested_price,
                )

            result = self._vendor.buy_stock(symbol, requested_price, quantity)
        except AppError as exc:
            self._record_failure(user_id, symbol, requested_price, quantity, exc)
            raise
        except Exception as exc:
            logger.exception("Unexpected error buying %s for user %s", symbol, user_id)
            error = InternalError(str(exc) or "Internal server error")
            self._record_failure(user_id, symbol, requested_price, quantity, error)
            raise error from exc

        transaction = TransactionRecord(
            id=result.transaction_id or str(uuid.uuid4()),
            user_id=user_id,
            symbol=symbol,
            quantity=quantity,
            requested_price=requested_price,
            status=TransactionStatus.SUCCESS,
            timestamp=self._clock(),
            name=stock.name,
            current_price=stock.price,
            deviation=check.deviation_display,
        )
        return self._ledger.record(transaction)

    def _record_failure(
        self,
        user_id: str,
        symbol: str,
        requested_price: float,
        quantity: int,
        error: AppError,
    ) -> TransactionRecord:
        transaction = TransactionRecord(
            id=str(uuid.uuid4()),
            user_id=user_id,
            symbol=symbol,
            quantity=quantity,
            requested_price=requested_price,
            status=TransactionStatus.FAILED,
            timestamp=self._clock(),
            error_message=error.message,
            error_code=error.code,
        )
        return self._ledger.record(transaction)
