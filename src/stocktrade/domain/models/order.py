"""Value objects produced while placing an order."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BuyResult:
    """Vendor acknowledgement of a buy order."""

    transaction_id: Optional[str] = None


@dataclass(frozen=True)
class PriceDeviationCheck:
    """Outcome of comparing a requested price to the catalog price."""

    deviation: float
    max_allowed: float
    is_valid: bool

    @property
    def deviation_display(self) -> str:
        """Deviation rounded to two decimals, e.g. "2.00"."""
        return f"{self.deviation:.2f}"
