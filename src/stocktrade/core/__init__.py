"""Core utilities and shared functionality."""

from stocktrade.core.cache import TTLCache, CacheEntry
from stocktrade.core.timezone import (
    resolve_timezone,
    now_in,
    localize,
    day_bounds,
)
from stocktrade.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    PriceDeviationExceededError,
    VendorError,
    VendorUnavailableError,
    VendorApiError,
    InternalError,
)

__all__ = [
    "TTLCache",
    "CacheEntry",
    "resolve_timezone",
    "now_in",
    "localize",
    "day_bounds",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "PriceDeviationExceededError",
    "VendorError",
    "VendorUnavailableError",
    "VendorApiError",
    "InternalError",
]
