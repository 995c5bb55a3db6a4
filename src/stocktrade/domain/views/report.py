"""View models for the daily trading report."""

from dataclasses import dataclass, field
from datetime import date

from stocktrade.domain.models import TransactionRecord


@dataclass
class ReportStats:
    """Headline numbers of a daily report."""

    total: int = 0
    successful: int = 0
    failed: int = 0
    success_rate: str = "0.00"
    total_volume: float = 0.0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "successful": self.successful,
            "failed": self.failed,
            "successRate": self.success_rate,
            "totalVolume": self.total_volume,
        }


@dataclass
class UserActivity:
    """Per-user breakdown of a day's transactions."""

    successful: list[TransactionRecord] = field(default_factory=list)
    failed: list[TransactionRecord] = field(default_factory=list)
    total_volume: float = 0.0


@dataclass
class DailyReport:
    """Rendered daily report."""

    day: date
    stats: ReportStats
    successful: list[TransactionRecord]
    failed: list[TransactionRecord]
    by_user: dict[str, UserActivity]
    html: str = ""
