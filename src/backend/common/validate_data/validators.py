from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Literal, Sequence

from pydantic import BaseModel, ConfigDict

from .context import ValidationContext
from .executor import validate_fields
from .models import Finding, RecordSet
from .rule import FieldRule


class TabValidator(BaseModel, ABC):
    """Rule catalog for one tab: ``validator(record_set, ctx) -> findings``."""

    model_config = ConfigDict(frozen=True)

    kind: str
    tab: str
    rules: List[FieldRule]

    @abstractmethod
    def __call__(self, record_set: RecordSet, ctx: ValidationContext) -> List[Finding]:  # pragma: no cover
        raise NotImplementedError


class AllRecordsValidator(TabValidator):
    """Validate every record of the tab, reporting each record's source row."""

    kind: Literal["all_records"] = "all_records"

    def __call__(self, record_set, ctx):
        findings: List[Finding] = []
        for record in record_set.get(self.tab, ()):
            findings.extend(validate_fields(self.rules, record, self.tab, record.row, ctx))
        return findings


class SingleRecordValidator(TabValidator):
    """Validate a tab that must hold exactly one record (e.g. a cover sheet)."""

    kind: Literal["single_record"] = "single_record"
    missing_message: str
    row: int = 2

    def __call__(self, record_set, ctx):
        records = record_set.get(self.tab) or []
        if len(records) != 1:
            return [Finding(message=self.missing_message, tab=self.tab)]
        return validate_fields(self.rules, records[0], self.tab, self.row, ctx)


def validate_all_records(tab: str, rules: Sequence[FieldRule]) -> AllRecordsValidator:
    return AllRecordsValidator(tab=tab, rules=list(rules))


def validate_single_record(
    tab: str,
    rules: Sequence[FieldRule],
    missing_message: str,
    *,
    row: int = 2,
) -> SingleRecordValidator:
    return SingleRecordValidator(tab=tab, rules=list(rules), missing_message=missing_message, row=row)
