from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .values import display

CURRENT_PREFIX = "current_"


class Record(BaseModel):
    """One spreadsheet row, already parsed into field key -> raw cell value."""

    model_config = ConfigDict(frozen=True)

    tab: str
    fields: Dict[str, Any] = Field(default_factory=dict)
    row: Optional[int] = None

    def value(self, key: str) -> Any:
        # Absent cells reach predicates as "", never as None.
        val = self.fields.get(key)
        return "" if val is None else val


RecordSet = Dict[str, List[Record]]


def group_records(records: Iterable[Record]) -> RecordSet:
    grouped: RecordSet = {}
    for record in records:
        grouped.setdefault(record.tab, []).append(record)
    return grouped


class Finding(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
    tab: str
    row: Optional[int] = None


ValidationItem = Finding


class ReportingPeriod(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_date: date
    end_date: date
    period_of_performance_end_date: date


class PeriodSummary(BaseModel):
    """Aggregates for one prior reporting period."""

    model_config = ConfigDict(frozen=True)

    attributes: Dict[str, Any] = Field(default_factory=dict)
    current: Dict[str, Decimal] = Field(default_factory=dict)

    @classmethod
    def from_flat(cls, raw: Mapping[str, Any]) -> "PeriodSummary":
        attributes: Dict[str, Any] = {}
        current: Dict[str, Decimal] = {}
        for key, val in raw.items():
            if key.startswith(CURRENT_PREFIX):
                if val in (None, ""):
                    continue
                try:
                    amount = Decimal(str(val))
                except InvalidOperation:
                    continue
                if amount.is_finite():
                    current[key[len(CURRENT_PREFIX):]] = amount
            else:
                attributes[key] = val
        return cls(attributes=attributes, current=current)

    def current_amount(self, key: str) -> Decimal:
        return self.current.get(key, Decimal("0"))

    def matches(self, expected: Mapping[str, Any]) -> bool:
        for key, val in expected.items():
            if display(self.attributes.get(key)) != display(val):
                return False
        return True
