from __future__ import annotations

import argparse
import json
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .registry import registry

# Ensure built-in rules are imported/registered when generating a catalog.
from . import rules as _builtin_rules  # noqa: F401


class RuleCatalogEntry(BaseModel):
    position: int
    rule_id: str
    rule_title: str
    policy_reference: str = ""
    sources: List[str] = Field(default_factory=list)

    module: str
    class_name: str

    config_model: str
    config_defaults: Dict[str, Any] = Field(default_factory=dict)
    config_schema: Dict[str, Any] = Field(default_factory=dict)


def build_catalog() -> List[RuleCatalogEntry]:
    """List registered rules in run order with their config defaults and schema."""
    entries: List[RuleCatalogEntry] = []
    for position, rule_id in enumerate(registry.ids(), start=1):
        rule_cls = registry.get(rule_id)
        cfg_model = rule_cls.config_model
        entries.append(
            RuleCatalogEntry(
                position=position,
                rule_id=rule_id,
                rule_title=rule_cls.rule_title,
                policy_reference=rule_cls.policy_reference,
                sources=list(rule_cls.sources),
                module=rule_cls.__module__,
                class_name=rule_cls.__name__,
                config_model=cfg_model.__name__,
                config_defaults=cfg_model().model_dump(mode="json"),
                config_schema=cfg_model.model_json_schema(),
            )
        )
    return entries


def _dump_json(catalog: list[dict[str, Any]]) -> str:
    return json.dumps(catalog, indent=2)


def _dump_yaml(catalog: list[dict[str, Any]]) -> str:
    import yaml

    return yaml.safe_dump(catalog, sort_keys=False)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="List the compliance rules and their configuration.")
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml).",
    )
    args = parser.parse_args(argv)

    catalog = [e.model_dump() for e in build_catalog()]
    if args.format == "json":
        print(_dump_json(catalog))
    else:
        print(_dump_yaml(catalog))


if __name__ == "__main__":
    main()
