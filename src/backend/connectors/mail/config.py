from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class MailConfig:
    smtp_host: str
    smtp_port: int
    sender: str
    recipient: str
    username: str = ""
    password: str = ""
    use_tls: bool = True


def get_mail_config() -> MailConfig:
    """
    Load report delivery settings from environment variables.

    Reads MAIL_SMTP_HOST, MAIL_SMTP_PORT (default 587), MAIL_FROM, REPORT_RECIPIENT and
    the optional MAIL_USERNAME, MAIL_PASSWORD, MAIL_USE_TLS (default true).
    """
    port_raw = os.getenv("MAIL_SMTP_PORT", "587").strip()
    try:
        port = int(port_raw)
    except ValueError as exc:
        raise ValueError(f"MAIL_SMTP_PORT must be an integer, got '{port_raw}'.") from exc

    return MailConfig(
        smtp_host=_require_env("MAIL_SMTP_HOST"),
        smtp_port=port,
        sender=_require_env("MAIL_FROM"),
        recipient=_require_env("REPORT_RECIPIENT"),
        username=os.getenv("MAIL_USERNAME", "").strip(),
        password=os.getenv("MAIL_PASSWORD", "").strip(),
        use_tls=os.getenv("MAIL_USE_TLS", "true").strip().lower() in {"1", "true", "yes", "on"},
    )


def _require_env(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise ValueError(f"Missing required environment variable: {name}")
    return value
