from __future__ import annotations

from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .models import AdType, DateRange

T = TypeVar("T", bound=BaseModel)


class RuleConfigBase(BaseModel):
    # Unknown keys in an override are a mistake, not something to ignore.
    model_config = ConfigDict(extra="forbid")

    enabled: bool = True


class CtrRuleConfig(RuleConfigBase):
    # Ad Grants policy: account CTR must stay at or above 5%.
    min_ctr: float = Field(default=0.05, ge=0, le=1)
    date_ranges: List[DateRange] = Field(
        default_factory=lambda: [DateRange.LAST_30_DAYS, DateRange.LAST_MONTH]
    )


class MinimumCountRuleConfig(RuleConfigBase):
    min_count: int = Field(default=2, ge=0)


class GeoTargetingRuleConfig(RuleConfigBase):
    min_count: int = Field(default=1, ge=0)


class CampaignStructureRuleConfig(RuleConfigBase):
    min_ad_groups: int = Field(default=2, ge=0)
    min_ads_per_ad_group: int = Field(default=2, ge=0)
    accepted_ad_types: List[AdType] = Field(
        default_factory=lambda: [AdType.TEXT_AD, AdType.EXPANDED_TEXT_AD]
    )


class KeywordQualityRuleConfig(RuleConfigBase):
    # Keywords scoring at or below this value fail. Unscored keywords are not evaluated.
    max_failing_quality_score: int = Field(default=2, ge=1, le=10)
    check_single_word_keywords: bool = True


class LinkLivenessRuleConfig(RuleConfigBase):
    check_ads: bool = True
    check_sitelinks: bool = True
    # 1 keeps requests strictly sequential.
    max_workers: int = Field(default=1, ge=1, le=32)


class ClientRulesConfig(BaseModel):
    """Account-specific configuration for all rules.

    Rules pull their typed config via `get_rule_config`.
    """

    rules: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    def get_rule_config(
        self,
        rule_id: str,
        model: Type[T],
        default: Optional[T] = None,
    ) -> T:
        if rule_id not in self.rules:
            if default is not None:
                return default
            return model()  # type: ignore[call-arg]
        raw = self.rules.get(rule_id, {})
        return model.model_validate(raw)

    def validate_for(self, config_models: Dict[str, Type[BaseModel]]) -> None:
        """Check every override against its rule's config model.

        Raises ValueError naming the rule for an unknown rule id or an invalid override.
        """
        for rule_id, raw in self.rules.items():
            model = config_models.get(rule_id)
            if model is None:
                raise ValueError(f"Unknown rule_id in rules config: {rule_id}")
            try:
                model.model_validate(raw)
            except ValueError as exc:
                raise ValueError(f"Invalid config for {rule_id}: {exc}") from exc
