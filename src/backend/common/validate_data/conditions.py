"""Conditional combinators.

A combinator wraps another predicate and only evaluates it when a condition on
a different field of the record holds; otherwise the rule is vacuously
satisfied. Combinators are predicates themselves, so they nest:

    WhenUS(key="country", inner=WhenNotBlank(key="zip", inner=IsValidZip()))
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field

from .predicates import (
    CumulativeAmountIsEqual,
    DateIsInPeriodOfPerformance,
    DateIsInReportingPeriod,
    DateIsOnOrAfter,
    DateIsOnOrAfterProgramStart,
    DateIsOnOrBefore,
    DropdownIncludes,
    HasSubrecipientKey,
    IsAtLeast50K,
    IsEqual,
    IsNotBlank,
    IsNumber,
    IsNumberOrBlank,
    IsOneOf,
    IsPositiveNumber,
    IsSum,
    IsValidDate,
    IsValidState,
    IsValidSubrecipient,
    IsValidZip,
    MatchesFilePart,
    NumberIsGreaterThanOrEqual,
    NumberIsLessThanOrEqual,
    Predicate,
)
from .values import display, is_blank, to_number

UNITED_STATES = ("usa", "united states")


def is_united_states(value) -> bool:
    return display(value).strip().lower() in UNITED_STATES


class WhenBlank(Predicate):
    kind: Literal["when_blank"] = "when_blank"
    key: str
    inner: "AnyPredicate"

    def __call__(self, value, record, ctx):
        if not is_blank(record.fields.get(self.key)):
            return True
        return self.inner(value, record, ctx)


class WhenNotBlank(Predicate):
    kind: Literal["when_not_blank"] = "when_not_blank"
    key: str
    inner: "AnyPredicate"

    def __call__(self, value, record, ctx):
        if is_blank(record.fields.get(self.key)):
            return True
        return self.inner(value, record, ctx)


class WhenUS(Predicate):
    kind: Literal["when_us"] = "when_us"
    key: str
    inner: "AnyPredicate"

    def __call__(self, value, record, ctx):
        if not is_united_states(record.value(self.key)):
            return True
        return self.inner(value, record, ctx)


class WhenGreaterThanZero(Predicate):
    kind: Literal["when_greater_than_zero"] = "when_greater_than_zero"
    key: str
    inner: "AnyPredicate"

    def __call__(self, value, record, ctx):
        amount = to_number(record.fields.get(self.key))
        if amount is None or amount <= 0:
            return True
        return self.inner(value, record, ctx)


AnyPredicate = Annotated[
    Union[
        IsNotBlank,
        IsNumber,
        IsNumberOrBlank,
        IsPositiveNumber,
        IsAtLeast50K,
        IsEqual,
        IsSum,
        CumulativeAmountIsEqual,
        IsValidDate,
        IsValidSubrecipient,
        HasSubrecipientKey,
        MatchesFilePart,
        NumberIsLessThanOrEqual,
        NumberIsGreaterThanOrEqual,
        DateIsOnOrBefore,
        DateIsOnOrAfter,
        DateIsInReportingPeriod,
        DateIsInPeriodOfPerformance,
        DateIsOnOrAfterProgramStart,
        DropdownIncludes,
        IsValidState,
        IsValidZip,
        IsOneOf,
        WhenBlank,
        WhenNotBlank,
        WhenUS,
        WhenGreaterThanZero,
    ],
    Field(discriminator="kind"),
]

for _combinator in (WhenBlank, WhenNotBlank, WhenUS, WhenGreaterThanZero):
    _combinator.model_rebuild()
