import smtplib
from unittest.mock import MagicMock, patch

import pytest

from connectors.mail.config import MailConfig, get_mail_config
from connectors.mail.smtp import ReportDeliveryError, SmtpReportSink


def _config(**overrides) -> MailConfig:
    values = dict(
        smtp_host="smtp.example.org",
        smtp_port=587,
        sender="audits@example.org",
        recipient="director@example.org",
        username="audits",
        password="pw",
    )
    values.update(overrides)
    return MailConfig(**values)


def test_deliver_sends_one_plain_text_message():
    with patch("connectors.mail.smtp.smtplib.SMTP") as smtp_cls:
        smtp = MagicMock()
        smtp_cls.return_value.__enter__.return_value = smtp
        SmtpReportSink(_config()).deliver("Ad Grants compliance: all rules passing", "[PASS]: ok")

    smtp_cls.assert_called_once_with("smtp.example.org", 587, timeout=30)
    smtp.starttls.assert_called_once()
    smtp.login.assert_called_once_with("audits", "pw")
    smtp.send_message.assert_called_once()
    msg = smtp.send_message.call_args.args[0]
    assert msg["To"] == "director@example.org"
    assert msg["Subject"] == "Ad Grants compliance: all rules passing"
    assert msg.get_content().strip() == "[PASS]: ok"


def test_no_login_without_username():
    with patch("connectors.mail.smtp.smtplib.SMTP") as smtp_cls:
        smtp = MagicMock()
        smtp_cls.return_value.__enter__.return_value = smtp
        SmtpReportSink(_config(username="", use_tls=False)).deliver("s", "b")

    smtp.starttls.assert_not_called()
    smtp.login.assert_not_called()


def test_delivery_failure_is_raised_not_retried():
    with patch("connectors.mail.smtp.smtplib.SMTP") as smtp_cls:
        smtp = MagicMock()
        smtp.send_message.side_effect = smtplib.SMTPRecipientsRefused({})
        smtp_cls.return_value.__enter__.return_value = smtp
        with pytest.raises(ReportDeliveryError) as info:
            SmtpReportSink(_config()).deliver("s", "b")

    assert info.value.recipient == "director@example.org"
    assert smtp.send_message.call_count == 1


def test_mail_config_from_env(monkeypatch):
    monkeypatch.setenv("MAIL_SMTP_HOST", "smtp.example.org")
    monkeypatch.setenv("MAIL_SMTP_PORT", "2525")
    monkeypatch.setenv("MAIL_FROM", "audits@example.org")
    monkeypatch.setenv("REPORT_RECIPIENT", "director@example.org")
    monkeypatch.setenv("MAIL_USE_TLS", "false")

    cfg = get_mail_config()
    assert cfg.smtp_port == 2525
    assert cfg.use_tls is False


def test_mail_config_requires_recipient(monkeypatch):
    monkeypatch.setenv("MAIL_SMTP_HOST", "smtp.example.org")
    monkeypatch.setenv("MAIL_FROM", "audits@example.org")
    monkeypatch.delenv("REPORT_RECIPIENT", raising=False)
    with pytest.raises(ValueError, match="REPORT_RECIPIENT"):
        get_mail_config()
