import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest

from common.compliance_engine.config import ClientRulesConfig
from common.compliance_engine.context import RuleContext
from common.compliance_engine.models import AccountSnapshot, DateRange
from common.compliance_engine.provider import InMemoryAccountProvider


class FakeLinkTransport:
    """Answers from a url -> status map (200 by default) and records every request."""

    def __init__(self, statuses=None, default: int = 200):
        self.statuses = dict(statuses or {})
        self.default = default
        self.calls: list[str] = []

    def fetch_status(self, url: str) -> int:
        self.calls.append(url)
        return self.statuses.get(url, self.default)


class CountingProvider(InMemoryAccountProvider):
    """In-memory provider that records each `select` call as (entity name, query)."""

    def __init__(self, snapshot):
        super().__init__(snapshot)
        self.selects: list[tuple[str, object]] = []

    def select(self, entity_type, query=None):
        self.selects.append((entity_type.__name__, query))
        return super().select(entity_type, query)


@pytest.fixture
def make_snapshot():
    def _make(
        *,
        campaigns=(),
        ad_groups=(),
        ads=(),
        sitelinks=(),
        keywords=(),
        targeted_locations=(),
        ctr_30_days: float = 0.06,
        ctr_last_month: float = 0.06,
    ) -> AccountSnapshot:
        return AccountSnapshot(
            customer_id="1234567890",
            campaigns=list(campaigns),
            ad_groups=list(ad_groups),
            ads=list(ads),
            sitelinks=list(sitelinks),
            keywords=list(keywords),
            targeted_locations=list(targeted_locations),
            stats={
                DateRange.LAST_30_DAYS: {
                    "date_range": DateRange.LAST_30_DAYS,
                    "ctr": ctr_30_days,
                    "clicks": int(ctr_30_days * 1000),
                    "impressions": 1000,
                },
                DateRange.LAST_MONTH: {
                    "date_range": DateRange.LAST_MONTH,
                    "ctr": ctr_last_month,
                    "clicks": int(ctr_last_month * 1000),
                    "impressions": 1000,
                },
            },
        )

    return _make


@pytest.fixture
def link_transport():
    return FakeLinkTransport()


@pytest.fixture
def make_ctx(link_transport):
    def _make(
        *,
        snapshot: AccountSnapshot,
        client_rules: dict | None = None,
        transport=None,
        provider=None,
    ) -> RuleContext:
        return RuleContext(
            provider=provider or InMemoryAccountProvider(snapshot),
            link_transport=transport or link_transport,
            customer_id=snapshot.customer_id,
            client_config=ClientRulesConfig(rules=client_rules or {}),
        )

    return _make


@pytest.fixture
def counting_provider():
    return CountingProvider


@pytest.fixture
def fake_transport():
    return FakeLinkTransport
