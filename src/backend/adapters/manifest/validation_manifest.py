from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from common.validate_data.context import normalize_reporting_period, normalize_tags
from common.validate_data.errors import ManifestError, ValidationContextError
from common.validate_data.models import PeriodSummary, Record, ReportingPeriod
from common.validate_data.reference import ReferenceLists


@dataclass(frozen=True)
class ValidationInputs:
    records: tuple[Record, ...]
    file_parts: dict[str, str]
    reporting_period: ReportingPeriod
    period_summaries: tuple[PeriodSummary, ...] = ()
    tags: Optional[frozenset[str]] = None
    reference_lists: Optional[ReferenceLists] = None
    meta: dict[str, Any] = field(default_factory=dict)


def validation_inputs_from_manifest(manifest: dict[str, Any]) -> ValidationInputs:
    """
    Build validation inputs from a JSON manifest.

    Expected shape:
      {
        "file_parts": {"agencyCode": "...", "projectId": "..."},
        "reporting_period": {
          "start_date": "YYYY-MM-DD",
          "end_date": "YYYY-MM-DD",
          "period_of_performance_end_date": "YYYY-MM-DD",
          "validation_rule_tags": ["..."]
        },
        "records": [{"tab": "cover", "row": 2, "fields": {...}}],
        "period_summaries": [{"award_number": "...", "current_<field>": 0}],
        "reference_lists": {"state code": ["wa", ...]}
      }

    Notes:
    - reporting_period and records are required
    - reference_lists is optional; when absent, dropdown checks fail closed
    - tags come from reporting_period.validation_rule_tags, or a top-level "tags"
    """
    if not isinstance(manifest, dict):
        raise ManifestError("Validation manifest must be an object.")

    period_raw = manifest.get("reporting_period")
    if not isinstance(period_raw, dict):
        raise ManifestError("Validation manifest missing required object: reporting_period")
    try:
        reporting_period = normalize_reporting_period(period_raw)
    except ValidationContextError as exc:
        raise ManifestError(str(exc)) from exc

    tags_raw = period_raw.get("validation_rule_tags", manifest.get("tags"))
    if tags_raw is not None and not isinstance(tags_raw, (str, list)):
        raise ManifestError("validation_rule_tags must be a tag or a list of tags.")
    lists_raw = manifest.get("reference_lists")
    if lists_raw is not None and not isinstance(lists_raw, dict):
        raise ManifestError("reference_lists must be an object of list name -> values.")

    return ValidationInputs(
        records=tuple(_parse_records(manifest.get("records"))),
        file_parts={str(k): str(v) for k, v in (manifest.get("file_parts") or {}).items()},
        reporting_period=reporting_period,
        period_summaries=tuple(
            PeriodSummary.from_flat(entry) for entry in _select_objects(manifest, "period_summaries")
        ),
        tags=normalize_tags(tags_raw),
        reference_lists=ReferenceLists(lists_raw) if lists_raw is not None else None,
        meta=dict(manifest.get("meta") or {}),
    )


def _parse_records(raw: Any) -> Iterable[Record]:
    if not isinstance(raw, list):
        raise ManifestError("Validation manifest missing required list: records")
    for entry in raw:
        if not isinstance(entry, dict):
            raise ManifestError("Record entries must be objects.")
        tab = entry.get("tab") or entry.get("type")
        if not tab:
            raise ManifestError("Record entry missing required field: tab")
        fields = entry.get("fields", entry.get("content")) or {}
        if not isinstance(fields, dict):
            raise ManifestError(f"Record fields must be an object (tab {tab}).")
        yield Record(tab=str(tab), fields=fields, row=_parse_row(entry.get("row", entry.get("sourceRow")), tab))


def _parse_row(raw: Any, tab: Any) -> Optional[int]:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ManifestError(f"Record row must be an integer (tab {tab}): {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ManifestError(f"Record row must be an integer (tab {tab}): {raw!r}") from exc


def _select_objects(manifest: dict[str, Any], key: str) -> list[dict[str, Any]]:
    raw = manifest.get(key) or []
    if not isinstance(raw, list) or not all(isinstance(item, dict) for item in raw):
        raise ManifestError(f"{key} must be a list of objects.")
    return raw
