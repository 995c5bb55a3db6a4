"""Enumerations for domain models."""

from enum import Enum


class TransactionStatus(str, Enum):
    """Terminal outcome of a buy attempt."""

    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
