"""Stock vendor providers module."""

from stocktrade.providers.stock_vendor import StockVendor
from stocktrade.providers.vendor_client import VendorClient
from stocktrade.providers.stub_vendor import StubStockVendor

__all__ = [
    "StockVendor",
    "VendorClient",
    "StubStockVendor",
]
