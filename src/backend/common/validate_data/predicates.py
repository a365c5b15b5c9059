"""Atomic field predicates.

Every predicate is a frozen pydantic model tagged by ``kind`` so rule catalogs
can be dumped, diffed and reloaded. Calling a predicate evaluates it:

    IsEqual(key="total")(value, record, ctx) -> bool

Predicates never raise on malformed cell values; anything they cannot
interpret fails the check.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Literal

from pydantic import BaseModel, ConfigDict, Field

from .context import ValidationContext
from .models import Record
from .subrecipients import subrecipient_key
from .values import (
    display,
    is_blank,
    is_number,
    is_valid_date,
    parse_date,
    parse_leading_float,
    round_amount,
    sum_amounts,
    to_number,
)

logger = logging.getLogger(__name__)

_ZIP_RE = re.compile(r"^\d{5}(-\d{4})?$")


class Predicate(BaseModel, ABC):
    model_config = ConfigDict(frozen=True)

    kind: str

    @abstractmethod
    def __call__(self, value: Any, record: Record, ctx: ValidationContext) -> bool:  # pragma: no cover
        raise NotImplementedError


def _as_decimal(value: float | None) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


def _matches_total(value: Any, amounts: Iterable[Decimal]) -> bool:
    # Non-finite or unroundable amounts never match.
    total = round_amount(sum_amounts(amounts))
    ours = round_amount(_as_decimal(to_number(value)))
    return ours is not None and total is not None and ours == total


class IsNotBlank(Predicate):
    kind: Literal["is_not_blank"] = "is_not_blank"

    def __call__(self, value, record, ctx):
        return is_number(value) or not is_blank(value)


class IsNumber(Predicate):
    kind: Literal["is_number"] = "is_number"

    def __call__(self, value, record, ctx):
        return is_number(value)


class IsNumberOrBlank(Predicate):
    kind: Literal["is_number_or_blank"] = "is_number_or_blank"

    def __call__(self, value, record, ctx):
        return is_blank(value) or is_number(value)


class IsPositiveNumber(Predicate):
    kind: Literal["is_positive_number"] = "is_positive_number"

    def __call__(self, value, record, ctx):
        return is_number(value) and value > 0


class IsAtLeast50K(Predicate):
    kind: Literal["is_at_least_50k"] = "is_at_least_50k"

    def __call__(self, value, record, ctx):
        return is_number(value) and value >= 50000


class IsEqual(Predicate):
    """Value equals another field of the same record to within a cent."""

    kind: Literal["is_equal"] = "is_equal"
    key: str

    def __call__(self, value, record, ctx):
        ours = parse_leading_float(value) or 0.0
        theirs = parse_leading_float(record.value(self.key)) or 0.0
        return abs(ours - theirs) < 0.01


class IsSum(Predicate):
    """Value equals the sum of the listed fields, both rounded to cents."""

    kind: Literal["is_sum"] = "is_sum"
    keys: List[str]

    def __call__(self, value, record, ctx):
        amounts = [_as_decimal(parse_leading_float(record.value(key))) for key in self.keys if key]
        return _matches_total(value, amounts)


class CumulativeAmountIsEqual(Predicate):
    """Value equals this period's amount plus the same amount across prior periods.

    Prior periods are the context's period summaries whose attributes equal
    every entry of ``match_values`` and, for each ``match_fields`` entry, equal
    the named field of the record being validated.
    """

    kind: Literal["cumulative_amount_is_equal"] = "cumulative_amount_is_equal"
    key: str
    match_values: Dict[str, Any] = Field(default_factory=dict)
    match_fields: Dict[str, str] = Field(default_factory=dict)

    def __call__(self, value, record, ctx):
        amounts = [_as_decimal(to_number(record.value(self.key)))]
        linked = {attr: record.value(field) for attr, field in self.match_fields.items()}
        for summary in ctx.period_summaries:
            if summary.matches(self.match_values) and summary.matches(linked):
                amounts.append(summary.current_amount(self.key))
        return _matches_total(value, amounts)


class IsValidDate(Predicate):
    kind: Literal["is_valid_date"] = "is_valid_date"

    def __call__(self, value, record, ctx):
        return is_valid_date(value)


class IsValidSubrecipient(Predicate):
    kind: Literal["is_valid_subrecipient"] = "is_valid_subrecipient"

    def __call__(self, value, record, ctx):
        return display(value) in ctx.subrecipients


class HasSubrecipientKey(Predicate):
    kind: Literal["has_subrecipient_key"] = "has_subrecipient_key"

    def __call__(self, value, record, ctx):
        return bool(subrecipient_key(record.fields))


class MatchesFilePart(Predicate):
    """Value equals a part of the uploaded file's name, ignoring leading zeros."""

    kind: Literal["matches_file_part"] = "matches_file_part"
    key: str

    def __call__(self, value, record, ctx):
        expected = ctx.file_part(self.key)
        if expected is None:
            logger.warning("File name part %r is not available; failing check closed.", self.key)
            return False
        return display(value).lstrip("0") == expected.lstrip("0")


class NumberIsLessThanOrEqual(Predicate):
    kind: Literal["number_is_less_than_or_equal"] = "number_is_less_than_or_equal"
    key: str

    def __call__(self, value, record, ctx):
        other = record.value(self.key)
        return is_number(value) and is_number(other) and value <= other


class NumberIsGreaterThanOrEqual(Predicate):
    kind: Literal["number_is_greater_than_or_equal"] = "number_is_greater_than_or_equal"
    key: str

    def __call__(self, value, record, ctx):
        other = record.value(self.key)
        return is_number(value) and is_number(other) and value >= other


class DateIsOnOrBefore(Predicate):
    kind: Literal["date_is_on_or_before"] = "date_is_on_or_before"
    key: str

    def __call__(self, value, record, ctx):
        ours, theirs = parse_date(value), parse_date(record.value(self.key))
        return ours is not None and theirs is not None and ours <= theirs


class DateIsOnOrAfter(Predicate):
    kind: Literal["date_is_on_or_after"] = "date_is_on_or_after"
    key: str

    def __call__(self, value, record, ctx):
        ours, theirs = parse_date(value), parse_date(record.value(self.key))
        return ours is not None and theirs is not None and ours >= theirs


class DateIsInReportingPeriod(Predicate):
    kind: Literal["date_is_in_reporting_period"] = "date_is_in_reporting_period"

    def __call__(self, value, record, ctx):
        dt = parse_date(value)
        if dt is None:
            return False
        period = ctx.reporting_period
        return period.start_date <= dt <= period.end_date


class DateIsInPeriodOfPerformance(Predicate):
    kind: Literal["date_is_in_period_of_performance"] = "date_is_in_period_of_performance"

    def __call__(self, value, record, ctx):
        dt = parse_date(value)
        if dt is None:
            return False
        return dt <= ctx.reporting_period.period_of_performance_end_date


class DropdownIncludes(Predicate):
    """Lowercased value is one of the entries of a template dropdown list."""

    kind: Literal["dropdown_includes"] = "dropdown_includes"
    list_name: str

    def __call__(self, value, record, ctx):
        if ctx.reference_lists is None:
            logger.warning("Dropdown values are not initialized; %r check fails closed.", self.list_name)
            return False
        present = ctx.reference_lists.includes(self.list_name, value)
        logger.debug("%s:%s is %s", self.list_name, value, "present" if present else "missing")
        return present


class IsValidState(Predicate):
    kind: Literal["is_valid_state"] = "is_valid_state"

    def __call__(self, value, record, ctx):
        return DropdownIncludes(list_name="state code")(value, record, ctx)


class IsValidZip(Predicate):
    kind: Literal["is_valid_zip"] = "is_valid_zip"

    def __call__(self, value, record, ctx):
        return bool(_ZIP_RE.match(display(value)))


class IsOneOf(Predicate):
    kind: Literal["is_one_of"] = "is_one_of"
    values: List[str]

    def __call__(self, value, record, ctx):
        return display(value) in self.values


class DateIsOnOrAfterProgramStart(Predicate):
    """Date falls on or after the start of the first reporting period."""

    kind: Literal["date_is_on_or_after_program_start"] = "date_is_on_or_after_program_start"

    def __call__(self, value, record, ctx):
        dt = parse_date(value)
        return dt is not None and dt >= ctx.first_reporting_period_start_date
