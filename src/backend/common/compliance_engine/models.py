from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class RuleStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class Severity(str, Enum):
    INFO = "INFO"
    HIGH = "HIGH"


def severity_for_status(status: "RuleStatus") -> Severity:
    # Fixed mapping: a failed grant policy check always needs attention.
    return {
        RuleStatus.PASS: Severity.INFO,
        RuleStatus.FAIL: Severity.HIGH,
        RuleStatus.NOT_APPLICABLE: Severity.INFO,
    }[status]


class EntityStatus(str, Enum):
    ENABLED = "ENABLED"
    PAUSED = "PAUSED"
    REMOVED = "REMOVED"


class AdType(str, Enum):
    TEXT_AD = "TEXT_AD"
    EXPANDED_TEXT_AD = "EXPANDED_TEXT_AD"
    RESPONSIVE_SEARCH_AD = "RESPONSIVE_SEARCH_AD"
    RESPONSIVE_DISPLAY_AD = "RESPONSIVE_DISPLAY_AD"
    CALL_AD = "CALL_AD"
    IMAGE_AD = "IMAGE_AD"
    OTHER = "OTHER"


class DateRange(str, Enum):
    LAST_30_DAYS = "LAST_30_DAYS"
    LAST_MONTH = "LAST_MONTH"
    THIS_MONTH = "THIS_MONTH"
    LAST_7_DAYS = "LAST_7_DAYS"


class Campaign(BaseModel):
    id: str
    name: str
    status: EntityStatus


class AdGroup(BaseModel):
    id: str
    name: str
    status: EntityStatus
    campaign_id: str
    campaign_status: EntityStatus = EntityStatus.ENABLED


class Ad(BaseModel):
    id: str
    status: EntityStatus
    type: AdType
    headline: str = ""
    final_url: Optional[str] = None
    ad_group_id: str
    ad_group_name: str = ""
    ad_group_status: EntityStatus = EntityStatus.ENABLED
    campaign_status: EntityStatus = EntityStatus.ENABLED


class SitelinkExtension(BaseModel):
    id: str
    link_text: str
    final_url: Optional[str] = None


class Keyword(BaseModel):
    id: str
    text: str
    status: EntityStatus
    quality_score: Optional[int] = Field(default=None, ge=1, le=10)
    ad_group_id: str
    ad_group_name: str = ""
    ad_group_status: EntityStatus = EntityStatus.ENABLED
    campaign_status: EntityStatus = EntityStatus.ENABLED


class TargetedLocation(BaseModel):
    id: str
    campaign_id: str = ""
    name: str = ""


class AccountStats(BaseModel):
    date_range: DateRange
    ctr: float = Field(ge=0, le=1)
    clicks: int = 0
    impressions: int = 0


class AccountSnapshot(BaseModel):
    """Point-in-time copy of everything the rules read from one account."""

    customer_id: str = ""
    campaigns: List[Campaign] = Field(default_factory=list)
    ad_groups: List[AdGroup] = Field(default_factory=list)
    ads: List[Ad] = Field(default_factory=list)
    sitelinks: List[SitelinkExtension] = Field(default_factory=list)
    keywords: List[Keyword] = Field(default_factory=list)
    targeted_locations: List[TargetedLocation] = Field(default_factory=list)
    stats: Dict[DateRange, AccountStats] = Field(default_factory=dict)


class RuleResultDetail(BaseModel):
    key: str
    status: RuleStatus
    message: str
    values: Dict[str, Any] = Field(default_factory=dict)

    def line(self) -> str:
        return f"[{self.status.value}]: {self.message}"


class RuleResult(BaseModel):
    rule_id: str
    rule_title: str
    policy_reference: str = ""
    sources: List[str] = Field(default_factory=list)

    status: RuleStatus
    severity: Severity = Severity.INFO
    summary: str = ""

    details: List[RuleResultDetail] = Field(default_factory=list)
    human_action: Optional[str] = None


class ComplianceReport(BaseModel):
    run_id: str
    generated_at: datetime
    customer_id: str = ""

    results: List[RuleResult] = Field(default_factory=list)
    totals: Dict[RuleStatus, int] = Field(default_factory=dict)

    def lines(self) -> List[str]:
        return [detail.line() for res in self.results for detail in res.details]

    def render_text(self) -> str:
        return "\n".join(self.lines())

    def subject(self) -> str:
        failed = self.totals.get(RuleStatus.FAIL, 0)
        account = f" {self.customer_id}" if self.customer_id else ""
        if failed:
            return f"Ad Grants compliance{account}: {failed} rule(s) failing"
        return f"Ad Grants compliance{account}: all rules passing"


def overall_status(details: List[RuleResultDetail]) -> RuleStatus:
    if not details:
        return RuleStatus.NOT_APPLICABLE
    if any(d.status == RuleStatus.FAIL for d in details):
        return RuleStatus.FAIL
    return RuleStatus.PASS
