from pathlib import Path

import pytest


class FakeLinkTransport:
    def __init__(self, statuses=None, default: int = 200):
        self.statuses = dict(statuses or {})
        self.default = default
        self.calls: list[str] = []

    def fetch_status(self, url: str) -> int:
        self.calls.append(url)
        return self.statuses.get(url, self.default)


@pytest.fixture
def sample_account_path() -> Path:
    return Path(__file__).resolve().parents[2] / "pipelines" / "fixtures" / "sample_account.json"


@pytest.fixture
def sample_transport():
    return FakeLinkTransport({"https://meals.example.org/old-donate": 404})
