from __future__ import annotations

from typing import Iterator, List, Optional, Protocol, Type, TypeVar

from pydantic import BaseModel

from .models import AccountSnapshot, AccountStats, AdGroup, Ad, Campaign, DateRange, Keyword, SitelinkExtension, TargetedLocation
from .query import EntityQuery

E = TypeVar("E", bound=BaseModel)


class AccountDataProvider(Protocol):
    def select(self, entity_type: Type[E], query: Optional[EntityQuery] = None) -> Iterator[E]:
        """Yield entities of `entity_type` matching every condition in `query`."""
        ...

    def account_stats(self, date_range: DateRange) -> AccountStats:
        """Return aggregate account statistics for a named relative date range."""
        ...


class LinkTransport(Protocol):
    def fetch_status(self, url: str) -> int:
        """Return the HTTP status for `url`; transport failures return 0 instead of raising."""
        ...


class InMemoryAccountProvider:
    """Serve queries from an `AccountSnapshot` (fixtures, tests, cached exports)."""

    def __init__(self, snapshot: AccountSnapshot) -> None:
        self._snapshot = snapshot
        self._collections: dict[type, List[BaseModel]] = {
            Campaign: list(snapshot.campaigns),
            AdGroup: list(snapshot.ad_groups),
            Ad: list(snapshot.ads),
            SitelinkExtension: list(snapshot.sitelinks),
            Keyword: list(snapshot.keywords),
            TargetedLocation: list(snapshot.targeted_locations),
        }

    @property
    def customer_id(self) -> str:
        return self._snapshot.customer_id

    def select(self, entity_type: Type[E], query: Optional[EntityQuery] = None) -> Iterator[E]:
        if entity_type not in self._collections:
            raise ValueError(f"Unsupported entity type: {entity_type.__name__}")
        query = query or EntityQuery()
        query.validate_for(entity_type)
        for entity in self._collections[entity_type]:
            if query.matches(entity):
                yield entity  # type: ignore[misc]

    def account_stats(self, date_range: DateRange) -> AccountStats:
        stats = self._snapshot.stats.get(date_range)
        if stats is None:
            raise KeyError(f"No account stats for date range {date_range.value}")
        return stats
