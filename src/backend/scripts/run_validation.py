from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path


def _ensure_backend_on_path() -> None:
    backend_dir = Path(__file__).resolve().parents[1]
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))


def _load_json(path: Path):
    with path.open() as handle:
        return json.load(handle)


def run_validation_from_manifest(manifest: dict, *, config=None):
    _ensure_backend_on_path()
    from adapters.manifest import validation_inputs_from_manifest
    from common.validate_data import validate_data

    inputs = validation_inputs_from_manifest(manifest)
    return validate_data(
        inputs.records,
        file_parts=inputs.file_parts,
        reporting_period=inputs.reporting_period,
        period_summaries=inputs.period_summaries,
        tags=inputs.tags,
        reference_lists=inputs.reference_lists,
        config=config,
    )


def _format_text(findings) -> str:
    if not findings:
        return "No validation findings."
    lines = []
    for item in findings:
        where = f"{item.tab}" if item.row is None else f"{item.tab}:{item.row}"
        lines.append(f"- [{where}] {item.message}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Validate a JSON manifest of report records and print the findings."
    )
    parser.add_argument("manifest", help="Path to a validation manifest (JSON).")
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text).",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Write findings to this file instead of stdout.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log per-tab diagnostics.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    _ensure_backend_on_path()
    from common.validate_data import ValidationEngineError, get_validation_config

    try:
        findings = run_validation_from_manifest(
            _load_json(Path(args.manifest)), config=get_validation_config()
        )
    except (OSError, json.JSONDecodeError) as exc:
        raise SystemExit(f"Could not read manifest {args.manifest}: {exc}") from exc
    except ValidationEngineError as exc:
        raise SystemExit(f"Invalid validation input: {exc}") from exc

    if args.format == "json":
        body = json.dumps([f.model_dump(mode="json") for f in findings], indent=2)
    else:
        body = _format_text(findings)

    if args.output:
        out_path = Path(args.output)
        out_path.write_text(body)
        print(f"Wrote {len(findings)} findings to {out_path}")
    else:
        print(body)
    return 1 if findings else 0


if __name__ == "__main__":
    raise SystemExit(main())
