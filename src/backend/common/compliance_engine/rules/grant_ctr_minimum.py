from __future__ import annotations

from ..config import CtrRuleConfig
from ..context import RuleContext, format_percent
from ..models import RuleResult, RuleResultDetail, RuleStatus
from ..registry import register_rule
from ..rule import Rule


@register_rule
class GRANT_CTR_MINIMUM(Rule):
    rule_id = "GRANT-CTR-MINIMUM"
    rule_title = "Account click-through rate is at least 5%"
    policy_reference = "Ad Grants policy: maintain 5% CTR"
    sources = ["Google Ads (account metrics)"]
    config_model = CtrRuleConfig

    def evaluate(self, ctx: RuleContext) -> RuleResult:
        cfg = ctx.client_config.get_rule_config(self.rule_id, CtrRuleConfig)
        if not cfg.enabled:
            return self.disabled_result()

        minimum = format_percent(cfg.min_ctr)
        details: list[RuleResultDetail] = []
        for date_range in cfg.date_ranges:
            stats = ctx.provider.account_stats(date_range)
            ctr = format_percent(stats.ctr)
            if stats.ctr >= cfg.min_ctr:
                status = RuleStatus.PASS
                message = f"Account CTR for {date_range.value} is {ctr}."
            else:
                status = RuleStatus.FAIL
                message = f"Account CTR for {date_range.value} is {ctr}. Need at least {minimum}."
            details.append(
                RuleResultDetail(
                    key=date_range.value,
                    status=status,
                    message=message,
                    values={
                        "ctr": stats.ctr,
                        "clicks": stats.clicks,
                        "impressions": stats.impressions,
                        "min_ctr": cfg.min_ctr,
                    },
                )
            )

        failing = [d.key for d in details if d.status == RuleStatus.FAIL]
        if failing:
            summary = f"CTR below {minimum} for {', '.join(failing)}."
        else:
            summary = f"CTR at or above {minimum} for every checked window."
        return self.build_result(
            details,
            summary=summary,
            human_action="Pause low-CTR keywords and ads, and tighten match types until CTR recovers.",
        )
