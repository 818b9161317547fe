from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class ReportSink(Protocol):
    def deliver(self, subject: str, body: str) -> None:
        """Deliver one text report. Failures raise; nothing is retried."""
        ...


def get_report_sink(name: str) -> ReportSink:
    """Resolve a report sink by name (smtp|file)."""
    sink = (name or "").strip().lower()
    if sink in ("smtp", ""):
        from connectors.mail.config import get_mail_config
        from connectors.mail.smtp import SmtpReportSink

        return SmtpReportSink(get_mail_config())
    if sink == "file":
        out = os.getenv("REPORT_OUTPUT_PATH", "").strip() or "compliance_report.txt"
        return FileReportSink(Path(out).resolve())
    raise ValueError(f"Unknown report sink '{name}' (expected 'smtp' or 'file').")


@dataclass(frozen=True)
class FileReportSink:
    path: Path

    def deliver(self, subject: str, body: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(f"{subject}\n\n{body}\n", encoding="utf-8")
        logger.info("Report written to %s", self.path)
