from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Union

from .config import ValidationConfig
from .errors import ValidationContextError
from .models import PeriodSummary, ReportingPeriod
from .reference import ReferenceLists
from .values import display, parse_date

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class ValidationContext:
    reporting_period: ReportingPeriod
    file_parts: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    first_reporting_period_start_date: date = date(2020, 3, 1)
    subrecipients: Mapping[str, Mapping[str, Any]] = field(default_factory=lambda: _EMPTY)
    # None means no tags were configured for the period: only untagged rules apply.
    tags: Optional[frozenset[str]] = None
    period_summaries: tuple[PeriodSummary, ...] = ()
    reference_lists: Optional[ReferenceLists] = None

    def file_part(self, key: str) -> Optional[str]:
        return self.file_parts.get(key)


def build_context(
    *,
    file_parts: Mapping[str, Any],
    reporting_period: Union[ReportingPeriod, Mapping[str, Any]],
    subrecipients: Optional[Mapping[str, Mapping[str, Any]]] = None,
    tags: Optional[Iterable[str]] = None,
    period_summaries: Iterable[Union[PeriodSummary, Mapping[str, Any]]] = (),
    reference_lists: Optional[ReferenceLists] = None,
    config: Optional[ValidationConfig] = None,
) -> ValidationContext:
    cfg = config or ValidationConfig()
    return ValidationContext(
        reporting_period=normalize_reporting_period(reporting_period),
        file_parts=MappingProxyType({str(k): display(v) for k, v in (file_parts or {}).items()}),
        first_reporting_period_start_date=cfg.first_reporting_period_start_date,
        subrecipients=MappingProxyType(dict(subrecipients or {})),
        tags=normalize_tags(tags),
        period_summaries=tuple(_normalize_summary(s) for s in period_summaries or ()),
        reference_lists=reference_lists,
    )


def normalize_reporting_period(raw: Union[ReportingPeriod, Mapping[str, Any]]) -> ReportingPeriod:
    if isinstance(raw, ReportingPeriod):
        return raw
    if not isinstance(raw, Mapping):
        raise ValidationContextError("Reporting period must be a mapping of start/end dates.")
    bounds: dict[str, date] = {}
    for name in ("start_date", "end_date", "period_of_performance_end_date"):
        parsed = parse_date(raw.get(name))
        if parsed is None:
            raise ValidationContextError(f"Reporting period {name} is missing or not a date: {raw.get(name)!r}")
        bounds[name] = parsed
    if bounds["start_date"] > bounds["end_date"]:
        raise ValidationContextError(
            f"Reporting period starts after it ends ({bounds['start_date']} > {bounds['end_date']})."
        )
    return ReportingPeriod(**bounds)


def normalize_tags(tags: Optional[Iterable[str]]) -> Optional[frozenset[str]]:
    if tags is None:
        return None
    if isinstance(tags, str):
        return frozenset([tags])
    return frozenset(str(t) for t in tags)


def _normalize_summary(raw: Union[PeriodSummary, Mapping[str, Any]]) -> PeriodSummary:
    if isinstance(raw, PeriodSummary):
        return raw
    if not isinstance(raw, Mapping):
        raise ValidationContextError("Period summaries must be mappings or PeriodSummary instances.")
    return PeriodSummary.from_flat(raw)
