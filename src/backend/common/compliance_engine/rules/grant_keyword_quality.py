from __future__ import annotations

from ..config import KeywordQualityRuleConfig
from ..context import RuleContext
from ..models import EntityStatus, Keyword, RuleResult, RuleResultDetail, RuleStatus
from ..query import EntityQuery, eq, lte, not_contains, where
from ..registry import register_rule
from ..rule import Rule


def active_keywords() -> EntityQuery:
    return where(
        eq("status", EntityStatus.ENABLED),
        eq("ad_group_status", EntityStatus.ENABLED),
        eq("campaign_status", EntityStatus.ENABLED),
    )


@register_rule
class GRANT_KEYWORD_QUALITY(Rule):
    rule_id = "GRANT-KEYWORD-QUALITY"
    rule_title = "Active keywords have quality scores above 2 and are not single words"
    policy_reference = "Ad Grants policy: keyword quality"
    sources = ["Google Ads (keywords)"]
    config_model = KeywordQualityRuleConfig

    def evaluate(self, ctx: RuleContext) -> RuleResult:
        cfg = ctx.client_config.get_rule_config(self.rule_id, KeywordQualityRuleConfig)
        if not cfg.enabled:
            return self.disabled_result()

        details = self._check_quality_scores(ctx, cfg)
        if cfg.check_single_word_keywords:
            details.extend(self._check_single_words(ctx))

        failing = sum(1 for d in details if d.status == RuleStatus.FAIL)
        summary = f"{failing} keyword problem(s) found." if failing else "Active keywords meet quality requirements."
        return self.build_result(
            details,
            summary=summary,
            human_action="Pause or rewrite low quality score keywords and expand single-word keywords into phrases.",
        )

    def _check_quality_scores(self, ctx: RuleContext, cfg: KeywordQualityRuleConfig) -> list[RuleResultDetail]:
        # Keywords with no quality score never match `<=` and are therefore treated as compliant.
        query = active_keywords().and_(lte("quality_score", cfg.max_failing_quality_score))
        details: list[RuleResultDetail] = []
        for keyword in ctx.provider.select(Keyword, query):
            details.append(
                RuleResultDetail(
                    key=f"quality_score:{keyword.id}",
                    status=RuleStatus.FAIL,
                    message=f'Keyword "{keyword.text}" has a quality score of {keyword.quality_score}.',
                    values={"keyword": keyword.text, "quality_score": keyword.quality_score},
                )
            )
        if not details:
            details.append(
                RuleResultDetail(
                    key="quality_score",
                    status=RuleStatus.PASS,
                    message=f"No active keywords have a quality score of {cfg.max_failing_quality_score} or lower.",
                )
            )
        return details

    def _check_single_words(self, ctx: RuleContext) -> list[RuleResultDetail]:
        details: list[RuleResultDetail] = []
        for keyword in ctx.provider.select(Keyword, active_keywords().and_(not_contains("text", " "))):
            details.append(
                RuleResultDetail(
                    key=f"single_word:{keyword.id}",
                    status=RuleStatus.FAIL,
                    message=f'Keyword "{keyword.text}" in ad group "{keyword.ad_group_name}" is a single word.',
                    values={"keyword": keyword.text, "ad_group_name": keyword.ad_group_name},
                )
            )
        if not details:
            details.append(
                RuleResultDetail(
                    key="single_word",
                    status=RuleStatus.PASS,
                    message="No active single-word keywords found.",
                )
            )
        return details
