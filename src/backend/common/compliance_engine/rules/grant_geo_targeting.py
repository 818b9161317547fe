from __future__ import annotations

from ..config import GeoTargetingRuleConfig
from ..context import RuleContext
from ..models import RuleResult, RuleResultDetail, RuleStatus, TargetedLocation
from ..registry import register_rule
from ..rule import Rule


@register_rule
class GRANT_GEO_TARGETING(Rule):
    rule_id = "GRANT-GEO-TARGETING"
    rule_title = "Account targets at least one location"
    policy_reference = "Ad Grants policy: geo-targeting"
    sources = ["Google Ads (campaign location criteria)"]
    config_model = GeoTargetingRuleConfig

    def evaluate(self, ctx: RuleContext) -> RuleResult:
        cfg = ctx.client_config.get_rule_config(self.rule_id, GeoTargetingRuleConfig)
        if not cfg.enabled:
            return self.disabled_result()

        count = 0
        for _ in ctx.provider.select(TargetedLocation):
            count += 1

        if count >= cfg.min_count:
            detail = RuleResultDetail(
                key="geo_targeting",
                status=RuleStatus.PASS,
                message=f"Account uses geo-targeting ({count} targeted location(s)).",
                values={"count": count},
            )
        else:
            detail = RuleResultDetail(
                key="geo_targeting",
                status=RuleStatus.FAIL,
                message="Account does not use geo-targeting. Target at least one location.",
                values={"count": count},
            )
        return self.build_result(
            [detail],
            summary=detail.message,
            human_action="Add location targeting to every campaign that serves the organization's area.",
        )
