from __future__ import annotations

import argparse
import json
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel

from .config import get_pricing_settings
from .logging_config import LOG_LEVELS, configure_logging
from .registry import rule_factory

# Ensure built-in rules are imported/registered when generating a catalog.
from . import rules as _builtin_rules  # noqa: F401


class RuleCatalogEntry(BaseModel):
    rule_type: str
    module: str
    class_name: str
    options_schema: Dict[str, Any]


def build_catalog() -> List[RuleCatalogEntry]:
    entries: List[RuleCatalogEntry] = []
    for rule_type in rule_factory.types():
        rule_cls = rule_factory.get(rule_type)
        entries.append(
            RuleCatalogEntry(
                rule_type=rule_type.value,
                module=rule_cls.__module__,
                class_name=rule_cls.__name__,
                options_schema=rule_cls.model_json_schema(),
            )
        )

    entries.sort(key=lambda e: e.rule_type)
    return entries


def _dump_json(catalog: List[Dict[str, Any]]) -> str:
    return json.dumps(catalog, indent=2, sort_keys=True)


def _dump_yaml(catalog: List[Dict[str, Any]]) -> str:
    return yaml.safe_dump(catalog, sort_keys=True)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="List the pricing rule types the rule factory can build.")
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml).",
    )
    settings = get_pricing_settings()
    parser.add_argument(
        "--log-level",
        type=str.lower,
        choices=LOG_LEVELS,
        default=settings.log_level,
        help="Log level (default: PRICING_LOG_LEVEL or info).",
    )
    args = parser.parse_args(argv)
    configure_logging(args.log_level, settings.log_format)

    catalog = [e.model_dump() for e in build_catalog()]
    if args.format == "json":
        print(_dump_json(catalog))
    else:
        print(_dump_yaml(catalog))


if __name__ == "__main__":
    main()
