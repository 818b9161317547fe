from __future__ import annotations

from ..config import MinimumCountRuleConfig
from ..context import RuleContext, spell_count
from ..models import RuleResult, RuleResultDetail, RuleStatus, SitelinkExtension
from ..registry import register_rule
from ..rule import Rule


@register_rule
class GRANT_SITELINKS_MINIMUM(Rule):
    rule_id = "GRANT-SITELINKS-MINIMUM"
    rule_title = "Account has at least two sitelink extensions"
    policy_reference = "Ad Grants policy: account structure"
    sources = ["Google Ads (sitelink assets)"]
    config_model = MinimumCountRuleConfig

    def evaluate(self, ctx: RuleContext) -> RuleResult:
        cfg = ctx.client_config.get_rule_config(self.rule_id, MinimumCountRuleConfig)
        if not cfg.enabled:
            return self.disabled_result()

        count = 0
        for _ in ctx.provider.select(SitelinkExtension):
            count += 1

        if count >= cfg.min_count:
            status = RuleStatus.PASS
            message = f"Account has {count} sitelink extensions."
        else:
            status = RuleStatus.FAIL
            message = f"Account only has {count} sitelink extensions. Need at least {spell_count(cfg.min_count)}."

        detail = RuleResultDetail(
            key="sitelinks",
            status=status,
            message=message,
            values={"count": count, "min_count": cfg.min_count},
        )
        return self.build_result(
            [detail],
            summary=message,
            human_action="Add sitelink extensions pointing to distinct pages of the website.",
        )
