from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Protocol

from common.compliance_engine.models import AccountSnapshot
from common.compliance_engine.provider import AccountDataProvider, InMemoryAccountProvider


class AccountSource(AccountDataProvider, Protocol):
    @property
    def customer_id(self) -> str:
        ...


def get_account_provider(name: str) -> AccountSource:
    """Resolve an account data provider by name (fixtures|live)."""
    source = (name or "").strip().lower()
    if source in ("live", ""):
        from .live_google_ads import LiveGoogleAdsProvider

        return LiveGoogleAdsProvider()
    if source == "fixtures":
        return FixturesAccountProvider.from_path(_fixture_path())
    raise ValueError(f"Unknown data source '{name}' (expected 'fixtures' or 'live').")


class FixturesAccountProvider(InMemoryAccountProvider):
    @classmethod
    def from_path(cls, path: Path) -> "FixturesAccountProvider":
        return cls(load_snapshot(path))


def load_snapshot(path: Path) -> AccountSnapshot:
    with path.open(encoding="utf-8") as handle:
        return AccountSnapshot.model_validate(json.load(handle))


def _fixture_path() -> Path:
    raw = os.getenv("ACCOUNT_FIXTURE_PATH", "").strip()
    if raw:
        return Path(raw).resolve()
    return _default_fixtures_root() / "sample_account.json"


def _default_fixtures_root() -> Path:
    # Shipped as package data next to this module.
    return Path(__file__).resolve().parent / "fixtures"
