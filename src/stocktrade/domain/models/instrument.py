"""Instrument (stock) domain model."""

import math
from dataclasses import dataclass, asdict
from typing import Any, Mapping


@dataclass(frozen=True)
class Instrument:
    """
    Tradable stock as listed by the vendor.

    Catalog snapshots hold these wholesale; an instrument is never updated in place.
    """

    symbol: str
    name: str
    price: float
    currency: str = "USD"

    @classmethod
    def from_vendor(cls, item: Mapping[str, Any]) -> "Instrument":
        """
        Build an instrument from one vendor ``items`` entry.

        Raises ValueError/TypeError when the entry is not a usable instrument.
        """
        if not isinstance(item, Mapping):
            raise TypeError(f"Instrument entry must be a mapping, got {type(item).__name__}")
        symbol = item.get("symbol")
        if not isinstance(symbol, str) or not symbol:
            raise ValueError(f"Instrument entry has no symbol: {item!r}")
        price = item.get("price")
        if isinstance(price, bool) or price is None:
            raise ValueError(f"Instrument {symbol} has no price")
        price = float(price)
        if not math.isfinite(price) or price <= 0:
            raise ValueError(f"Instrument {symbol} has an unusable price: {price}")
        return cls(
            symbol=symbol,
            name=str(item.get("name") or symbol),
            price=price,
            currency=str(item.get("currency") or "USD"),
        )

    def to_dict(self) -> dict:
        return asdict(self)
