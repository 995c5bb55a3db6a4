"""SMTP email delivery for the daily report."""

import logging
import smtplib
from dataclasses import dataclass
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from stocktrade.config.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailAttachment:
    filename: str
    content: str
    mime_subtype: str = "json"


class EmailSender:
    """Sends HTML mail with optional attachments through one SMTP relay."""

    def __init__(
        self,
        host: Optional[str],
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        sender: Optional[str] = None,
        recipients: Optional[list[str]] = None,
        timeout_sec: float = 30.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.sender = sender or username
        self.recipients = list(recipients or [])
        self.timeout_sec = timeout_sec

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailSender":
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_user,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            sender=settings.email_from,
            recipients=settings.get_email_recipients(),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.sender and self.recipients)

    def build_message(
        self,
        subject: str,
        html: str,
        attachments: Optional[list[EmailAttachment]] = None,
    ) -> MIMEMultipart:
        msg = MIMEMultipart()
        msg["From"] = self.sender or ""
        msg["To"] = ", ".join(self.recipients)
        msg["Subject"] = subject
        msg.attach(MIMEText(html, "html"))

        for attachment in attachments or []:
            part = MIMEApplication(attachment.content.encode("utf-8"), _subtype=attachment.mime_subtype)
            part.add_header("Content-Disposition", "attachment", filename=attachment.filename)
            msg.attach(part)
        return msg

    def send(
        self,
        subject: str,
        html: str,
        attachments: Optional[list[EmailAttachment]] = None,
    ) -> None:
        """
        Deliver one message to every recipient.

        Raises:
            RuntimeError: if the sender has no host, sender or recipients
            smtplib.SMTPException / OSError: on delivery failure
        """
        if not self.is_configured:
            raise RuntimeError("Email delivery is not configured (SMTP_HOST, EMAIL_FROM, EMAIL_TO)")

        msg = self.build_message(subject, html, attachments)
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout_sec) as server:
            if self.use_tls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(msg)

        logger.info("Email sent: %s (recipients=%d)", subject, len(self.recipients))
