from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Type

from pydantic import BaseModel

from .context import RuleContext
from .models import RuleResult, RuleResultDetail, RuleStatus, overall_status, severity_for_status


class Rule(ABC):
    rule_id: str
    rule_title: str
    policy_reference: str
    sources: List[str]
    config_model: Type[BaseModel]

    def __init__(self):
        if not getattr(self, "rule_id", None):
            raise ValueError("Rule must define rule_id")

    @abstractmethod
    def evaluate(self, ctx: RuleContext) -> RuleResult:  # pragma: no cover
        raise NotImplementedError

    def disabled_result(self) -> RuleResult:
        return RuleResult(
            rule_id=self.rule_id,
            rule_title=self.rule_title,
            policy_reference=self.policy_reference,
            sources=self.sources,
            status=RuleStatus.NOT_APPLICABLE,
            severity=severity_for_status(RuleStatus.NOT_APPLICABLE),
            summary="Rule disabled by account configuration.",
        )

    def build_result(
        self,
        details: List[RuleResultDetail],
        *,
        summary: str,
        human_action: Optional[str] = None,
    ) -> RuleResult:
        status = overall_status(details)
        return RuleResult(
            rule_id=self.rule_id,
            rule_title=self.rule_title,
            policy_reference=self.policy_reference,
            sources=self.sources,
            status=status,
            severity=severity_for_status(status),
            summary=summary,
            details=details,
            human_action=human_action if status == RuleStatus.FAIL else None,
        )
