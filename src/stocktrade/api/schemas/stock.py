"""Pydantic schemas for stock endpoints."""

from stocktrade.api.schemas.common import CamelModel
from stocktrade.domain.models import Instrument


class StockResponse(CamelModel):
    """Response schema for a single stock."""

    symbol: str
    name: str
    price: float
    currency: str = "USD"

    @classmethod
    def from_instrument(cls, stock: Instrument) -> "StockResponse":
        return cls(symbol=stock.symbol, name=stock.name, price=stock.price, currency=stock.currency)


class PaginationMeta(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class StockPageResponse(CamelModel):
    """One page of the stock catalog."""

    items: list[StockResponse]
    pagination: PaginationMeta
