from __future__ import annotations

import logging
from typing import Any, Iterator, Optional, Type, TypeVar

from pydantic import BaseModel

from adapters.google_ads.rows import ROW_ADAPTERS, account_stats_from_rows
from common.compliance_engine.models import AccountStats, DateRange
from common.compliance_engine.query import EntityQuery
from connectors.google_ads.client import build_client, gaql_search
from connectors.google_ads.config import GoogleAdsConfig, get_google_ads_config
from connectors.google_ads.gaql import build_entity_query, build_stats_query

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=BaseModel)


class LiveGoogleAdsProvider:
    """Account data provider backed by the Google Ads API (read-only GAQL searches)."""

    def __init__(self, *, config: Optional[GoogleAdsConfig] = None, client: Any = None) -> None:
        self._config = config or get_google_ads_config()
        self._client = client if client is not None else build_client(self._config)

    @property
    def customer_id(self) -> str:
        return self._config.customer_id

    def select(self, entity_type: Type[E], query: Optional[EntityQuery] = None) -> Iterator[E]:
        adapter = ROW_ADAPTERS.get(entity_type)
        if adapter is None:
            raise ValueError(f"Unsupported entity type: {entity_type.__name__}")
        gaql = build_entity_query(entity_type, query)
        for row in gaql_search(self._client, self._config.customer_id, gaql):
            entity = adapter(row)
            # Unscored keywords come back as 0 from the API and as None after mapping.
            if query is None or query.matches(entity):
                yield entity  # type: ignore[misc]

    def account_stats(self, date_range: DateRange) -> AccountStats:
        rows = gaql_search(self._client, self._config.customer_id, build_stats_query(date_range))
        stats = account_stats_from_rows(rows, date_range)
        logger.debug("CTR %s: %.4f (%d/%d)", date_range.value, stats.ctr, stats.clicks, stats.impressions)
        return stats
