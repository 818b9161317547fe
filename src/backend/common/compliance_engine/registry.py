from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Type

from pydantic import BaseModel

from .rule import Rule


class RuleRegistry:
    """Rule classes by id. Registration order is the order rules run and report in."""

    def __init__(self):
        self._by_id: Dict[str, Type[Rule]] = {}

    def register(self, rule_cls: Type[Rule]) -> None:
        rule_id = getattr(rule_cls, "rule_id", None)
        if not rule_id:
            raise ValueError("Rule class missing rule_id")
        if rule_id in self._by_id:
            raise ValueError(f"Duplicate rule_id registered: {rule_id}")
        self._by_id[rule_id] = rule_cls

    def get(self, rule_id: str) -> Type[Rule]:
        try:
            return self._by_id[rule_id]
        except KeyError:
            raise KeyError(f"Unknown rule_id: {rule_id}") from None

    def ids(self) -> List[str]:
        return list(self._by_id)

    def create_all(self, rule_ids: Optional[Iterable[str]] = None) -> List[Rule]:
        """Instantiate rules in run order, optionally limited to `rule_ids`.

        Every requested id must be registered; a typo raises KeyError instead of
        quietly skipping a check.
        """
        if rule_ids is None:
            return [cls() for cls in self._by_id.values()]
        wanted = set(rule_ids)
        for rule_id in wanted:
            self.get(rule_id)
        return [cls() for rule_id, cls in self._by_id.items() if rule_id in wanted]

    def config_models(self) -> Dict[str, Type[BaseModel]]:
        return {rule_id: cls.config_model for rule_id, cls in self._by_id.items()}


registry = RuleRegistry()


def register_rule(rule_cls: Type[Rule]) -> Type[Rule]:
    registry.register(rule_cls)
    return rule_cls
