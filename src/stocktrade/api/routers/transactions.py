"""Transaction API endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from stocktrade.api.deps import get_ledger_service, get_trade_service
from stocktrade.api.schemas import (
    ApiResponse,
    BuyOrderEnvelope,
    BuyOrderRequest,
    BuyOrderResponse,
    TransactionListResponse,
    TransactionResponse,
)
from stocktrade.domain.models import TransactionStatus
from stocktrade.services import LedgerService, TradeExecutionService

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.post("/buy", response_model=BuyOrderEnvelope, status_code=201)
def buy_stock(
    data: BuyOrderRequest,
    trading: TradeExecutionService = Depends(get_trade_service),
):
    """Execute a stock purchase."""
    txn = trading.buy_stock(
        user_id=data.user_id,
        symbol=data.symbol,
        requested_price=data.price,
        quantity=data.quantity,
    )
    return BuyOrderEnvelope(data=BuyOrderResponse.from_record(txn))


@router.get("", response_model=ApiResponse[TransactionListResponse])
def list_transactions(
    user_id: Optional[str] = Query(None, alias="userId", max_length=50),
    status: Optional[TransactionStatus] = Query(None),
    on_date: Optional[date] = Query(None, alias="date", description="Day in YYYY-MM-DD"),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """List ledger entries, oldest first."""
    records = ledger.query(user_id=user_id, status=status, on_date=on_date)
    return ApiResponse(
        data=TransactionListResponse(
            items=[TransactionResponse.from_record(t) for t in records],
            total=len(records),
        )
    )
