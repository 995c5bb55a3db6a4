"""Pydantic schemas for portfolio endpoints."""

from datetime import datetime
from typing import Optional

from stocktrade.api.schemas.common import CamelModel
from stocktrade.domain.views import PortfolioView


class HoldingResponse(CamelModel):
    symbol: str
    name: str
    quantity: int
    current_price: float
    total_value: float
    currency: str = "USD"


class PortfolioResponse(CamelModel):
    """Response schema for a user's valued holdings."""

    user_id: str
    holdings: list[HoldingResponse]
    total_value: float
    last_updated: Optional[datetime] = None

    @classmethod
    def from_view(cls, view: PortfolioView) -> "PortfolioResponse":
        return cls(
            user_id=view.user_id,
            holdings=[
                HoldingResponse(
                    symbol=h.symbol,
                    name=h.name,
                    quantity=h.quantity,
                    current_price=h.current_price,
                    total_value=h.total_value,
                    currency=h.currency,
                )
                for h in view.holdings
            ],
            total_value=view.total_value,
            last_updated=view.last_updated,
        )
