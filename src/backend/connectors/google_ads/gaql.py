"""Render engine queries as Google Ads Query Language (GAQL).

Each supported entity maps its model attributes onto GAQL fields of one
resource. Attributes without a mapping (derived values such as an ad's
headline) can be selected but not filtered on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from common.compliance_engine.models import (
    Ad,
    AdGroup,
    Campaign,
    DateRange,
    Keyword,
    SitelinkExtension,
    TargetedLocation,
)
from common.compliance_engine.query import Condition, EntityQuery, Operator


@dataclass(frozen=True)
class EntityMapping:
    resource: str
    fields: dict[str, str]
    extra_select: tuple[str, ...] = ()
    base_where: tuple[str, ...] = ()

    def select_fields(self) -> list[str]:
        out: list[str] = []
        for gaql_field in list(self.fields.values()) + list(self.extra_select):
            if gaql_field not in out:
                out.append(gaql_field)
        return out


ENTITY_MAPPINGS: dict[type, EntityMapping] = {
    Campaign: EntityMapping(
        resource="campaign",
        fields={
            "id": "campaign.id",
            "name": "campaign.name",
            "status": "campaign.status",
        },
    ),
    AdGroup: EntityMapping(
        resource="ad_group",
        fields={
            "id": "ad_group.id",
            "name": "ad_group.name",
            "status": "ad_group.status",
            "campaign_id": "campaign.id",
            "campaign_status": "campaign.status",
        },
    ),
    Ad: EntityMapping(
        resource="ad_group_ad",
        fields={
            "id": "ad_group_ad.ad.id",
            "status": "ad_group_ad.status",
            "type": "ad_group_ad.ad.type",
            "ad_group_id": "ad_group.id",
            "ad_group_name": "ad_group.name",
            "ad_group_status": "ad_group.status",
            "campaign_status": "campaign.status",
        },
        extra_select=(
            "ad_group_ad.ad.final_urls",
            "ad_group_ad.ad.text_ad.headline",
            "ad_group_ad.ad.expanded_text_ad.headline_part1",
            "ad_group_ad.ad.responsive_search_ad.headlines",
        ),
    ),
    Keyword: EntityMapping(
        resource="ad_group_criterion",
        fields={
            "id": "ad_group_criterion.criterion_id",
            "text": "ad_group_criterion.keyword.text",
            "status": "ad_group_criterion.status",
            "quality_score": "ad_group_criterion.quality_info.quality_score",
            "ad_group_id": "ad_group.id",
            "ad_group_name": "ad_group.name",
            "ad_group_status": "ad_group.status",
            "campaign_status": "campaign.status",
        },
        base_where=(
            "ad_group_criterion.type = 'KEYWORD'",
            "ad_group_criterion.negative = FALSE",
        ),
    ),
    SitelinkExtension: EntityMapping(
        resource="asset",
        fields={
            "id": "asset.id",
            "link_text": "asset.sitelink_asset.link_text",
        },
        extra_select=("asset.final_urls",),
        base_where=("asset.type = 'SITELINK'",),
    ),
    TargetedLocation: EntityMapping(
        resource="campaign_criterion",
        fields={
            "id": "campaign_criterion.criterion_id",
            "campaign_id": "campaign.id",
            "name": "campaign_criterion.location.geo_target_constant",
        },
        base_where=(
            "campaign_criterion.type = 'LOCATION'",
            "campaign_criterion.negative = FALSE",
        ),
    ),
}

# Fields compared as numbers rather than quoted strings.
_NUMERIC_FIELDS = {
    "campaign.id",
    "ad_group.id",
    "ad_group_ad.ad.id",
    "ad_group_criterion.criterion_id",
    "ad_group_criterion.quality_info.quality_score",
    "asset.id",
    "campaign_criterion.criterion_id",
}


def mapping_for(entity_type: type) -> EntityMapping:
    try:
        return ENTITY_MAPPINGS[entity_type]
    except KeyError:
        raise ValueError(f"Unsupported entity type: {entity_type.__name__}") from None


def build_entity_query(entity_type: type, query: Optional[EntityQuery] = None) -> str:
    mapping = mapping_for(entity_type)
    clauses = list(mapping.base_where)
    for cond in (query.conditions if query else ()):
        clauses.append(render_condition(mapping, cond))

    text = f"SELECT {', '.join(mapping.select_fields())} FROM {mapping.resource}"
    if clauses:
        text = f"{text} WHERE {' AND '.join(clauses)}"
    return text


def build_stats_query(date_range: DateRange) -> str:
    return (
        "SELECT metrics.ctr, metrics.clicks, metrics.impressions "
        f"FROM customer WHERE segments.date DURING {date_range.value}"
    )


def render_condition(mapping: EntityMapping, cond: Condition) -> str:
    gaql_field = mapping.fields.get(cond.field)
    if gaql_field is None:
        raise ValueError(f"Attribute '{cond.field}' cannot be filtered on {mapping.resource}")
    numeric = gaql_field in _NUMERIC_FIELDS

    if cond.op == Operator.EQ:
        return f"{gaql_field} = {_literal(cond.value, numeric)}"
    if cond.op == Operator.IN:
        values = ", ".join(_literal(v, numeric) for v in cond.value)
        return f"{gaql_field} IN ({values})"
    if cond.op == Operator.LTE:
        return f"{gaql_field} <= {_literal(cond.value, numeric)}"
    if cond.op == Operator.GTE:
        return f"{gaql_field} >= {_literal(cond.value, numeric)}"
    if cond.op == Operator.CONTAINS:
        return f"{gaql_field} LIKE '%{_escape_like(str(cond.value))}%'"
    if cond.op == Operator.NOT_CONTAINS:
        return f"{gaql_field} NOT LIKE '%{_escape_like(str(cond.value))}%'"
    raise ValueError(f"Unsupported operator: {cond.op}")


def _literal(value: Any, numeric: bool) -> str:
    if isinstance(value, Enum):
        value = value.value
    if numeric:
        return str(int(value))
    return "'" + str(value).replace("\\", "\\\\").replace("'", "\\'") + "'"


def _escape_like(value: str) -> str:
    # GAQL LIKE treats [, ], % and _ as special; wrap each in brackets.
    out = []
    for ch in value.replace("'", "\\'"):
        out.append(f"[{ch}]" if ch in "[]%_" else ch)
    return "".join(out)
