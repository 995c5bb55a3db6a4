"""Outbound notifications (daily report email)."""

from stocktrade.notify.email_sender import EmailAttachment, EmailSender

__all__ = ["EmailAttachment", "EmailSender"]
