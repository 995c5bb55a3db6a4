"""Background thread that sends the daily report at a fixed local time."""

import logging
import threading
from datetime import datetime, timedelta, tzinfo
from typing import Callable, Optional

from stocktrade.core.timezone import localize, now_in
from stocktrade.notify.email_sender import EmailSender
from stocktrade.services.report_service import ReportService

logger = logging.getLogger(__name__)


def parse_run_time(value: str) -> tuple[int, int]:
    """Parse ``HH:MM`` into (hour, minute)."""
    try:
        hour_text, minute_text = value.strip().split(":")
        hour, minute = int(hour_text), int(minute_text)
    except ValueError as exc:
        raise ValueError(f"Invalid report time {value!r}, expected HH:MM") from exc
    if not (0 <= hour < 24 and 0 <= minute < 60):
        raise ValueError(f"Invalid report time {value!r}, expected HH:MM")
    return hour, minute


def next_run_after(now: datetime, hour: int, minute: int, tz: tzinfo) -> datetime:
    """First ``hour:minute`` in ``tz`` strictly after ``now``."""
    local_now = now.astimezone(tz)
    candidate = localize(
        datetime.combine(local_now.date(), datetime.min.time()).replace(hour=hour, minute=minute),
        tz,
    )
    if candidate <= local_now:
        candidate = localize(
            datetime.combine(local_now.date() + timedelta(days=1), datetime.min.time()).replace(
                hour=hour, minute=minute
            ),
            tz,
        )
    return candidate


class DailyReportScheduler:
    """
    Sends the daily report once a day.

    A failed delivery is logged and the scheduler waits for the next day.
    """

    def __init__(
        self,
        report_service: ReportService,
        email_sender: EmailSender,
        run_at: str,
        tz: tzinfo,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._report_service = report_service
        self._email_sender = email_sender
        self._hour, self._minute = parse_run_time(run_at)
        self._tz = tz
        self._clock = clock or (lambda: now_in(tz))
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._start_lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def next_run(self) -> datetime:
        return next_run_after(self._clock(), self._hour, self._minute, self._tz)

    def start(self) -> None:
        with self._start_lock:
            if self.is_running:
                logger.debug("Report scheduler already running")
                return
            self._stop_event.clear()
            self._thread = threading.Thread(
                target=self._run, name="daily-report-scheduler", daemon=True
            )
            self._thread.start()
            logger.info(
                "Daily report scheduled at %02d:%02d (next run %s)",
                self._hour,
                self._minute,
                self.next_run().isoformat(),
            )

    def stop(self, timeout: float = 5.0) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def run_once(self) -> bool:
        """Send one report now; returns False if delivery failed."""
        try:
            self._report_service.send_daily_report(self._email_sender)
        except Exception:
            logger.exception("Failed to send daily report")
            return False
        return True

    def _run(self) -> None:
        target = self.next_run()
        while not self._stop_event.is_set():
            wait_seconds = max((target - self._clock()).total_seconds(), 0.0)
            if self._stop_event.wait(wait_seconds):
                break
            self.run_once()
            # next target is relative to the one that fired, not to the clock
            target = next_run_after(target, self._hour, self._minute, self._tz)
