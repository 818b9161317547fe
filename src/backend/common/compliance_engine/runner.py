from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable, Optional

from .context import RuleContext
from .models import ComplianceReport, RuleStatus
from .registry import registry

logger = logging.getLogger(__name__)


class RulesRunner:
    def __init__(self, rules: Optional[Iterable] = None):
        self._rules = list(rules) if rules is not None else registry.create_all()

    def run(self, ctx: RuleContext, *, rule_ids: Optional[set[str]] = None) -> ComplianceReport:
        if rule_ids is not None:
            unknown = set(rule_ids) - {rule.rule_id for rule in self._rules}
            if unknown:
                raise KeyError(f"Unknown rule_id: {', '.join(sorted(unknown))}")

        # Every selected rule runs; one rule's outcome never gates another.
        results = []
        for rule in self._rules:
            if rule_ids is not None and rule.rule_id not in rule_ids:
                continue
            result = rule.evaluate(ctx)
            logger.info("%s: %s (%d line(s))", rule.rule_id, result.status.value, len(result.details))
            results.append(result)

        totals: dict[RuleStatus, int] = {}
        for res in results:
            totals[res.status] = totals.get(res.status, 0) + 1

        return ComplianceReport(
            run_id=str(uuid.uuid4()),
            generated_at=datetime.now(timezone.utc),
            customer_id=ctx.customer_id,
            results=results,
            totals=totals,
        )
