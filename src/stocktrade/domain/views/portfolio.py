"""View models for portfolio outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class Holding:
    """A user's position in one symbol, valued at the catalog price."""

    symbol: str
    name: str
    quantity: int
    current_price: float
    total_value: float
    currency: str = "USD"


@dataclass
class PortfolioView:
    """All holdings of a user, largest position first."""

    user_id: str
    holdings: list[Holding] = field(default_factory=list)
    total_value: float = 0.0
    last_updated: Optional[datetime] = None
