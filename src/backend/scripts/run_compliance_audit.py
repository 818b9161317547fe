from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger("scripts.run_compliance_audit")


def _ensure_backend_on_path() -> None:
    backend_dir = Path(__file__).resolve().parents[1]
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))


def load_client_rules_config():
    """Read per-account rule overrides from GRANT_RULES_CONFIG_PATH (optional JSON file)."""
    _ensure_backend_on_path()
    from common.compliance_engine.config import ClientRulesConfig
    from common.compliance_engine.registry import registry

    raw_path = os.getenv("GRANT_RULES_CONFIG_PATH", "").strip()
    if not raw_path:
        return ClientRulesConfig()
    path = Path(raw_path)
    with path.open(encoding="utf-8") as handle:
        payload = json.load(handle)
    if isinstance(payload, dict) and "rules" not in payload:
        payload = {"rules": payload}
    config = ClientRulesConfig.model_validate(payload)
    config.validate_for(registry.config_models())
    return config


def run_compliance_audit(provider, link_transport, client_config=None, *, customer_id: str = ""):
    _ensure_backend_on_path()
    from common.compliance_engine.config import ClientRulesConfig
    from common.compliance_engine.context import RuleContext
    from common.compliance_engine.registry import registry
    from common.compliance_engine.runner import RulesRunner

    client_config = client_config or ClientRulesConfig()
    client_config.validate_for(registry.config_models())
    ctx = RuleContext(
        provider=provider,
        link_transport=link_transport,
        customer_id=customer_id,
        client_config=client_config,
    )
    return RulesRunner().run(ctx)


def deliver_report(report, sink) -> None:
    sink.deliver(report.subject(), report.render_text())


def main() -> int:
    _ensure_backend_on_path()
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from connectors.web.link_checker import UrlLinkTransport
    from pipelines.data_source import get_account_provider
    from pipelines.report_sink import get_report_sink

    data_source = os.getenv("DATA_SOURCE", "live").strip().lower()
    provider = get_account_provider(data_source)
    sink = get_report_sink(os.getenv("REPORT_SINK", "smtp"))
    client_config = load_client_rules_config()

    logger.info("Starting compliance audit (data source: %s, account: %s)", data_source, provider.customer_id)
    report = run_compliance_audit(
        provider,
        UrlLinkTransport(),
        client_config,
        customer_id=provider.customer_id,
    )
    deliver_report(report, sink)
    logger.info(
        "Compliance audit finished: %s",
        ", ".join(f"{status.value}={count}" for status, count in report.totals.items()),
    )
    # Rule outcomes are reported in the report body only, never through the exit status.
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
