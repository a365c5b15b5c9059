from __future__ import annotations

import argparse
import json
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .registry import registry

# Ensure default catalogs are imported/registered when generating a catalog.
from . import tabs as _default_tabs  # noqa: F401


class TabCatalogEntry(BaseModel):
    tab: str
    validator_kind: str
    missing_message: str = ""

    rules: List[Dict[str, Any]] = Field(default_factory=list)


def build_catalog() -> List[TabCatalogEntry]:
    entries: List[TabCatalogEntry] = []
    for validator in registry:
        entries.append(
            TabCatalogEntry(
                tab=validator.tab,
                validator_kind=validator.kind,
                missing_message=getattr(validator, "missing_message", ""),
                rules=[rule.model_dump(mode="json", exclude_none=True) for rule in validator.rules],
            )
        )
    return entries


def _dump_json(catalog: list[dict[str, Any]]) -> str:
    return json.dumps(catalog, indent=2)


def _dump_yaml(catalog: list[dict[str, Any]]) -> str:
    import yaml

    return yaml.safe_dump(catalog, sort_keys=False)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Dump the registered tab rule catalogs.")
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
