from __future__ import annotations

from typing import Any, Optional

from common.compliance_engine.models import (
    AccountStats,
    Ad,
    AdGroup,
    AdType,
    Campaign,
    DateRange,
    EntityStatus,
    Keyword,
    SitelinkExtension,
    TargetedLocation,
)


class GoogleAdsRowAdapterError(ValueError):
    pass


def campaign_from_row(row: Any) -> Campaign:
    return Campaign(
        id=str(row.campaign.id),
        name=str(row.campaign.name),
        status=_status(row.campaign.status),
    )


def ad_group_from_row(row: Any) -> AdGroup:
    return AdGroup(
        id=str(row.ad_group.id),
        name=str(row.ad_group.name),
        status=_status(row.ad_group.status),
        campaign_id=str(row.campaign.id),
        campaign_status=_status(row.campaign.status),
    )


def ad_from_row(row: Any) -> Ad:
    ad = row.ad_group_ad.ad
    return Ad(
        id=str(ad.id),
        status=_status(row.ad_group_ad.status),
        type=_ad_type(ad.type_),
        headline=_headline(ad),
        final_url=_first(ad.final_urls),
        ad_group_id=str(row.ad_group.id),
        ad_group_name=str(row.ad_group.name),
        ad_group_status=_status(row.ad_group.status),
        campaign_status=_status(row.campaign.status),
    )


def keyword_from_row(row: Any) -> Keyword:
    criterion = row.ad_group_criterion
    # The API reports an unscored keyword as 0; valid scores are 1-10.
    score = int(criterion.quality_info.quality_score or 0)
    return Keyword(
        id=str(criterion.criterion_id),
        text=str(criterion.keyword.text),
        status=_status(criterion.status),
        quality_score=score if score > 0 else None,
        ad_group_id=str(row.ad_group.id),
        ad_group_name=str(row.ad_group.name),
        ad_group_status=_status(row.ad_group.status),
        campaign_status=_status(row.campaign.status),
    )


def sitelink_from_row(row: Any) -> SitelinkExtension:
    return SitelinkExtension(
        id=str(row.asset.id),
        link_text=str(row.asset.sitelink_asset.link_text),
        final_url=_first(row.asset.final_urls),
    )


def targeted_location_from_row(row: Any) -> TargetedLocation:
    return TargetedLocation(
        id=str(row.campaign_criterion.criterion_id),
        campaign_id=str(row.campaign.id),
        name=str(row.campaign_criterion.location.geo_target_constant or ""),
    )


def account_stats_from_rows(rows: Any, date_range: DateRange) -> AccountStats:
    """Fold customer-level metric rows into one CTR figure.

    CTR is recomputed from summed clicks and impressions so that segmented rows
    aggregate correctly; an account with no impressions has a CTR of 0.
    """
    clicks = 0
    impressions = 0
    for row in rows:
        clicks += int(row.metrics.clicks or 0)
        impressions += int(row.metrics.impressions or 0)
    ctr = clicks / impressions if impressions else 0.0
    return AccountStats(date_range=date_range, ctr=ctr, clicks=clicks, impressions=impressions)


ROW_ADAPTERS = {
    Campaign: campaign_from_row,
    AdGroup: ad_group_from_row,
    Ad: ad_from_row,
    Keyword: keyword_from_row,
    SitelinkExtension: sitelink_from_row,
    TargetedLocation: targeted_location_from_row,
}


def _enum_name(value: Any) -> str:
    name = getattr(value, "name", None)
    if isinstance(name, str):
        return name
    if isinstance(value, str):
        return value
    raise GoogleAdsRowAdapterError(f"Expected an enum value, got {value!r}")


def _status(value: Any) -> EntityStatus:
    name = _enum_name(value)
    try:
        return EntityStatus(name)
    except ValueError:
        # UNKNOWN/UNSPECIFIED never count as enabled.
        return EntityStatus.REMOVED


def _ad_type(value: Any) -> AdType:
    try:
        return AdType(_enum_name(value))
    except ValueError:
        return AdType.OTHER


def _headline(ad: Any) -> str:
    legacy = getattr(getattr(ad, "text_ad", None), "headline", "")
    if legacy:
        return str(legacy)
    expanded = getattr(getattr(ad, "expanded_text_ad", None), "headline_part1", "")
    if expanded:
        return str(expanded)
    headlines = getattr(getattr(ad, "responsive_search_ad", None), "headlines", None) or []
    for asset in headlines:
        text = getattr(asset, "text", "")
        if text:
            return str(text)
    return f"Ad {ad.id}"


def _first(values: Any) -> Optional[str]:
    for value in values or []:
        if value:
            return str(value)
    return None
