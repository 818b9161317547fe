from __future__ import annotations

from dataclasses import dataclass, field

from .config import ClientRulesConfig
from .provider import AccountDataProvider, LinkTransport


@dataclass(frozen=True)
class RuleContext:
    provider: AccountDataProvider
    link_transport: LinkTransport
    customer_id: str = ""
    client_config: ClientRulesConfig = field(default_factory=ClientRulesConfig)


def format_percent(ratio: float) -> str:
    return f"{ratio * 100:.2f}%"


def spell_count(number: int) -> str:
    words = {0: "ZERO", 1: "ONE", 2: "TWO", 3: "THREE", 4: "FOUR", 5: "FIVE"}
    return words.get(number, str(number))
