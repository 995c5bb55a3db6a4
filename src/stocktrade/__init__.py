"""Stock trading service: vendor-backed order execution with an in-memory ledger."""

__version__ = "1.0.0"
