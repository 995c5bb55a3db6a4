"""Daily trading report: statistics and HTML rendering."""

import json
import logging
from datetime import date, datetime, tzinfo
from html import escape
from typing import Optional

from stocktrade.core.timezone import now_in
from stocktrade.domain.models import TransactionRecord
from stocktrade.domain.views import DailyReport, ReportStats, UserActivity
from stocktrade.notify.email_sender import EmailAttachment, EmailSender
from stocktrade.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


class ReportService:
    """Builds and delivers the daily summary of the ledger."""

    def __init__(self, ledger: LedgerService, tz: Optional[tzinfo] = None):
        self._ledger = ledger
        self._tz = tz or ledger.tz

    def generate_daily_report(self, day: Optional[date] = None) -> DailyReport:
        """Report on every transaction of ``day`` (today by default)."""
        day = day or now_in(self._tz).date()
        transactions = self._ledger.query(on_date=day)

        successful = [t for t in transactions if t.is_success]
        failed = [t for t in transactions if not t.is_success]

        stats = ReportStats(
            total=len(transactions),
            successful=len(successful),
            failed=len(failed),
            success_rate=f"{(len(successful) / len(transactions) * 100) if transactions else 0:.2f}",
            total_volume=sum(t.total for t in successful),
        )

        report = DailyReport(
            day=day,
            stats=stats,
            successful=successful,
            failed=failed,
            by_user=self.group_by_user(transactions),
        )
        report.html = self.render_html(report)
        return report

    @staticmethod
    def group_by_user(transactions: list[TransactionRecord]) -> dict[str, UserActivity]:
        grouped: dict[str, UserActivity] = {}
        for txn in transactions:
            activity = grouped.setdefault(txn.user_id, UserActivity())
            if txn.is_success:
                activity.successful.append(txn)
                activity.total_volume += txn.total
            else:
                activity.failed.append(txn)
        return grouped

    def send_daily_report(self, sender: EmailSender, day: Optional[date] = None) -> ReportStats:
        """Generate the report and email it with a JSON attachment."""
        report = self.generate_daily_report(day)
        payload = {
            "stats": report.stats.to_dict(),
            "transactions": {
                "successful": [t.to_dict() for t in report.successful],
                "failed": [t.to_dict() for t in report.failed],
            },
        }
        sender.send(
            subject=f"Daily Trading Report - {report.day.strftime('%a %b %d %Y')}",
            html=report.html,
            attachments=[
                EmailAttachment(
                    filename=f"trading-report-{report.day.isoformat()}.json",
                    content=json.dumps(payload, indent=2),
                )
            ],
        )
        logger.info("Daily report sent (total=%d)", report.stats.total)
        return report.stats

    def render_html(self, report: DailyReport) -> str:
        stats = report.stats
        parts = [
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            "<style>",
            "body { font-family: Arial, sans-serif; margin: 20px; }",
            "table { border-collapse: collapse; width: 100%; margin-bottom: 20px; }",
            "th, td { border: 1px solid #ddd; padding: 8px; text-align: left; }",
            "th { background-color: #4CAF50; color: white; }",
            ".success { color: #4CAF50; } .failed { color: #f44336; }",
            "</style>",
            "</head>",
            "<body>",
            f"<h1>Daily Trading Report - {report.day.strftime('%a %b %d %Y')}</h1>",
            "<h2>Summary Statistics</h2>",
            "<ul>",
            f"<li>Total Transactions: {stats.total}</li>",
            f"<li class=\"success\">Successful: {stats.successful}</li>",
            f"<li class=\"failed\">Failed: {stats.failed}</li>",
            f"<li>Success Rate: {stats.success_rate}%</li>",
            f"<li>Total Volume: ${stats.total_volume:.2f}</li>",
            "</ul>",
            "<h2>Successful Transactions</h2>",
        ]

        if report.successful:
            rows = [
                [
                    self._time(t.timestamp),
                    t.user_id,
                    t.symbol,
                    str(t.quantity),
                    f"${t.requested_price:.2f}",
                    f"${t.total:.2f}",
                    f"{t.deviation}%",
                ]
                for t in report.successful
            ]
            parts.append(_table(
                ["Time", "User ID", "Symbol", "Quantity", "Price", "Total", "Price Deviation"], rows
            ))
        else:
            parts.append("<p>No successful transactions today.</p>")

        parts.append("<h2>Failed Transactions</h2>")
        if report.failed:
            rows = [
                [
                    self._time(t.timestamp),
                    t.user_id,
                    t.symbol,
                    str(t.quantity),
                    f"${t.requested_price:.2f}",
                    t.error_message or "",
                ]
                for t in report.failed
            ]
            parts.append(_table(["Time", "User ID", "Symbol", "Quantity", "Price", "Error"], rows))
        else:
            parts.append("<p>No failed transactions today.</p>")

        parts.append("<h2>User Activity Summary</h2>")
        rows = [
            [user_id, str(len(a.successful)), str(len(a.failed)), f"${a.total_volume:.2f}"]
            for user_id, a in report.by_user.items()
        ]
        parts.append(_table(["User ID", "Successful Trades", "Failed Trades", "Total Volume"], rows))

        parts.extend([
            "<p style=\"margin-top: 30px; color: #666;\">",
            "This is an automated report generated by the Stock Trading Service.<br>",
            f"Report generated at: {now_in(self._tz).isoformat()}",
            "</p>",
            "</body>",
            "</html>",
        ])
        return "\n".join(parts)

    def _time(self, ts: datetime) -> str:
        return ts.astimezone(self._tz).strftime("%H:%M:%S")


def _table(headers: list[str], rows: list[list[str]]) -> str:
    """HTML table with escaped cell text."""
    lines = ["<table>", "<tr>" + "".join(f"<th>{escape(h)}</th>" for h in headers) + "</tr>"]
    for row in rows:
        lines.append("<tr>" + "".join(f"<td>{escape(cell)}</td>" for cell in row) + "</tr>")
    lines.append("</table>")
    return "\n".join(lines)
