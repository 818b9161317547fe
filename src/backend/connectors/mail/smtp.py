from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from .config import MailConfig

logger = logging.getLogger(__name__)


class ReportDeliveryError(RuntimeError):
    def __init__(self, message: str, recipient: str):
        super().__init__(message)
        self.recipient = recipient


class SmtpReportSink:
    """Deliver the report as one plain-text email to the configured recipient."""

    def __init__(self, config: MailConfig, *, timeout_seconds: float = 30) -> None:
        self._config = config
        self._timeout = timeout_seconds

    def deliver(self, subject: str, body: str) -> None:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self._config.sender
        msg["To"] = self._config.recipient
        msg.set_content(body)

        try:
            with smtplib.SMTP(self._config.smtp_host, self._config.smtp_port, timeout=self._timeout) as smtp:
                if self._config.use_tls:
                    smtp.starttls()
                if self._config.username:
                    smtp.login(self._config.username, self._config.password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise ReportDeliveryError(f"Report delivery failed: {exc}", self._config.recipient) from exc
        logger.info("Report delivered to %s", self._config.recipient)
