from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

from ..config import LinkLivenessRuleConfig
from ..context import RuleContext
from ..models import Ad, EntityStatus, RuleResult, RuleResultDetail, RuleStatus, SitelinkExtension
from ..provider import LinkTransport
from ..query import eq, where
from ..registry import register_rule
from ..rule import Rule

LIVE_STATUS = 200


def fetch_statuses(
    transport: LinkTransport,
    urls: Sequence[Optional[str]],
    *,
    max_workers: int = 1,
) -> list[int]:
    """Fetch every URL and return statuses in input order.

    A missing URL is reported as status 0 without a request.
    """

    def _fetch(url: Optional[str]) -> int:
        if not url:
            return 0
        return transport.fetch_status(url)

    if max_workers <= 1 or len(urls) <= 1:
        return [_fetch(url) for url in urls]
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(_fetch, urls))


@register_rule
class GRANT_LINK_LIVENESS(Rule):
    rule_id = "GRANT-LINK-LIVENESS"
    rule_title = "Ad and sitelink destination URLs respond with HTTP 200"
    policy_reference = "Ad Grants policy: functional website"
    sources = ["Google Ads (ads, sitelink assets)", "HTTP"]
    config_model = LinkLivenessRuleConfig

    def evaluate(self, ctx: RuleContext) -> RuleResult:
        cfg = ctx.client_config.get_rule_config(self.rule_id, LinkLivenessRuleConfig)
        if not cfg.enabled:
            return self.disabled_result()

        details: list[RuleResultDetail] = []
        if cfg.check_ads:
            details.extend(self._check_ads(ctx, cfg))
        if cfg.check_sitelinks:
            details.extend(self._check_sitelinks(ctx, cfg))

        broken = sum(1 for d in details if d.status == RuleStatus.FAIL)
        summary = f"{broken} broken destination URL(s) found." if broken else "All destination URLs are live."
        return self.build_result(
            details,
            summary=summary,
            human_action="Fix or replace destination URLs that do not return HTTP 200.",
        )

    def _check_ads(self, ctx: RuleContext, cfg: LinkLivenessRuleConfig) -> list[RuleResultDetail]:
        query = where(
            eq("status", EntityStatus.ENABLED),
            eq("ad_group_status", EntityStatus.ENABLED),
            eq("campaign_status", EntityStatus.ENABLED),
        )
        ads = list(ctx.provider.select(Ad, query))
        statuses = fetch_statuses(ctx.link_transport, [ad.final_url for ad in ads], max_workers=cfg.max_workers)

        details: list[RuleResultDetail] = []
        for ad, status_code in zip(ads, statuses):
            if status_code == LIVE_STATUS:
                continue
            details.append(
                RuleResultDetail(
                    key=f"ad:{ad.id}",
                    status=RuleStatus.FAIL,
                    message=f'Ad "{ad.headline}" has a broken destination URL ({_describe(status_code)}): {ad.final_url}',
                    values={"headline": ad.headline, "url": ad.final_url, "status_code": status_code},
                )
            )
        if not details:
            details.append(
                RuleResultDetail(
                    key="ads",
                    status=RuleStatus.PASS,
                    message=f"All {len(ads)} active ad destination URL(s) are live.",
                    values={"checked": len(ads)},
                )
            )
        return details

    def _check_sitelinks(self, ctx: RuleContext, cfg: LinkLivenessRuleConfig) -> list[RuleResultDetail]:
        sitelinks = list(ctx.provider.select(SitelinkExtension))
        statuses = fetch_statuses(
            ctx.link_transport,
            [sitelink.final_url for sitelink in sitelinks],
            max_workers=cfg.max_workers,
        )

        details: list[RuleResultDetail] = []
        for sitelink, status_code in zip(sitelinks, statuses):
            if status_code == LIVE_STATUS:
                continue
            details.append(
                RuleResultDetail(
                    key=f"sitelink:{sitelink.id}",
                    status=RuleStatus.FAIL,
                    message=(
                        f'Sitelink "{sitelink.link_text}" has a broken destination URL '
                        f"({_describe(status_code)}): {sitelink.final_url}"
                    ),
                    values={"link_text": sitelink.link_text, "url": sitelink.final_url, "status_code": status_code},
                )
            )
        if not details:
            details.append(
                RuleResultDetail(
                    key="sitelinks",
                    status=RuleStatus.PASS,
                    message=f"All {len(sitelinks)} sitelink destination URL(s) are live.",
                    values={"checked": len(sitelinks)},
                )
            )
        return details


def _describe(status_code: int) -> str:
    if status_code == 0:
        return "no response"
    return f"HTTP {status_code}"
