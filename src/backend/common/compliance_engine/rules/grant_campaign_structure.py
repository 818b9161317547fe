from __future__ import annotations

from ..config import CampaignStructureRuleConfig
from ..context import RuleContext, spell_count
from ..models import Ad, AdGroup, Campaign, EntityStatus, RuleResult, RuleResultDetail, RuleStatus
from ..query import eq, in_, where
from ..registry import register_rule
from ..rule import Rule


@register_rule
class GRANT_CAMPAIGN_STRUCTURE(Rule):
    """Each enabled campaign needs two enabled ad groups; each of those needs two enabled text ads.

    The ad-group check runs once for every enabled ad group of an enabled
    campaign, whether or not the campaign itself passes.
    """

    rule_id = "GRANT-CAMPAIGN-STRUCTURE"
    rule_title = "Campaigns have at least two ad groups with at least two ads each"
    policy_reference = "Ad Grants policy: account structure"
    sources = ["Google Ads (campaigns, ad groups, ads)"]
    config_model = CampaignStructureRuleConfig

    def evaluate(self, ctx: RuleContext) -> RuleResult:
        cfg = ctx.client_config.get_rule_config(self.rule_id, CampaignStructureRuleConfig)
        if not cfg.enabled:
            return self.disabled_result()

        details: list[RuleResultDetail] = []
        campaigns = 0
        for campaign in ctx.provider.select(Campaign, where(eq("status", EntityStatus.ENABLED))):
            campaigns += 1
            details.extend(self.check_campaign(ctx, campaign, cfg))

        failing = sum(1 for d in details if d.status == RuleStatus.FAIL)
        if not campaigns:
            summary = "No enabled campaigns to check."
        elif failing:
            summary = f"{failing} structure problem(s) across {campaigns} enabled campaign(s)."
        else:
            summary = f"All {campaigns} enabled campaign(s) meet the structure minimums."
        return self.build_result(
            details,
            summary=summary,
            human_action="Split thin campaigns into at least two themed ad groups with two text ads each.",
        )

    def check_campaign(
        self,
        ctx: RuleContext,
        campaign: Campaign,
        cfg: CampaignStructureRuleConfig,
    ) -> list[RuleResultDetail]:
        ad_groups = list(
            ctx.provider.select(
                AdGroup,
                where(eq("campaign_id", campaign.id), eq("status", EntityStatus.ENABLED)),
            )
        )
        count = len(ad_groups)
        if count >= cfg.min_ad_groups:
            campaign_detail = RuleResultDetail(
                key=f"campaign:{campaign.id}",
                status=RuleStatus.PASS,
                message=f'Campaign "{campaign.name}" has {count} ad group(s).',
                values={"campaign_name": campaign.name, "ad_group_count": count},
            )
        else:
            campaign_detail = RuleResultDetail(
                key=f"campaign:{campaign.id}",
                status=RuleStatus.FAIL,
                message=(
                    f'Campaign "{campaign.name}" only has {count} ad group(s). '
                    f"Need at least {spell_count(cfg.min_ad_groups)}."
                ),
                values={"campaign_name": campaign.name, "ad_group_count": count},
            )

        details = [campaign_detail]
        for ad_group in ad_groups:
            details.append(self.check_ad_group(ctx, ad_group, cfg))
        return details

    def check_ad_group(
        self,
        ctx: RuleContext,
        ad_group: AdGroup,
        cfg: CampaignStructureRuleConfig,
    ) -> RuleResultDetail:
        count = 0
        query = where(
            eq("ad_group_id", ad_group.id),
            eq("status", EntityStatus.ENABLED),
            in_("type", cfg.accepted_ad_types),
        )
        for _ in ctx.provider.select(Ad, query):
            count += 1

        if count >= cfg.min_ads_per_ad_group:
            return RuleResultDetail(
                key=f"ad_group:{ad_group.id}",
                status=RuleStatus.PASS,
                message=f'Ad group "{ad_group.name}" has {count} ad(s).',
                values={"ad_group_name": ad_group.name, "ad_count": count},
            )
        return RuleResultDetail(
            key=f"ad_group:{ad_group.id}",
            status=RuleStatus.FAIL,
            message=(
                f'Ad group "{ad_group.name}" only has {count} ad(s). '
                f"Need at least {spell_count(cfg.min_ads_per_ad_group)}."
            ),
            values={"ad_group_name": ad_group.name, "ad_count": count},
        )
