"""Catalog store protocol."""

from typing import Protocol, Optional

from stocktrade.domain.models import Instrument


class CatalogStore(Protocol):
    """Interface for the cached instrument snapshot."""

    def get_catalog(self) -> Optional[list[Instrument]]:
        """Return the live snapshot, or None when absent or expired."""
        ...

    def set_catalog(self, instruments: list[Instrument], ttl_seconds: float) -> None:
        """Replace the whole snapshot; it expires after ``ttl_seconds``."""
        ...

    def invalidate_catalog(self) -> None:
        """Drop the snapshot so the next read refetches."""
        ...
