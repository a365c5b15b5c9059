from __future__ import annotations

from ..conditions import WhenGreaterThanZero, WhenNotBlank
from ..predicates import (
    CumulativeAmountIsEqual,
    DateIsInPeriodOfPerformance,
    DateIsInReportingPeriod,
    DateIsOnOrAfter,
    DateIsOnOrAfterProgramStart,
    IsNotBlank,
    IsNumberOrBlank,
    IsPositiveNumber,
    IsSum,
    IsValidDate,
    IsValidSubrecipient,
    NumberIsLessThanOrEqual,
)
from ..registry import register_tab
from ..rule import field_rule
from ..validators import validate_all_records

GRANTS = register_tab(
    validate_all_records(
        "grants",
        [
            field_rule("award number", IsNotBlank(), "Award number must not be blank"),
            field_rule(
                "subrecipient id",
                IsValidSubrecipient(),
                'Subrecipient ID "{}" is not listed in the subrecipient tab',
            ),
            field_rule("award amount", IsPositiveNumber(), 'Award amount "{}" must be a positive number'),
            field_rule(
                "award date",
                DateIsOnOrAfterProgramStart(),
                'Award date "{}" is before the first reporting period',
                is_date_value=True,
            ),
            field_rule(
                "period of performance start date",
                IsValidDate(),
                'Period of performance start date "{}" must be a valid date',
                is_date_value=True,
            ),
            field_rule(
                "period of performance end date",
                DateIsOnOrAfter(key="period of performance start date"),
                'Period of performance end date "{}" must be on or after the start date',
                is_date_value=True,
            ),
            field_rule(
                "current quarter obligation",
                NumberIsLessThanOrEqual(key="award amount"),
                'Current quarter obligation "{}" must not exceed the award amount',
            ),
            field_rule(
                "expenditure start date",
                WhenGreaterThanZero(key="total expenditure amount", inner=DateIsInPeriodOfPerformance()),
                'Expenditure start date "{}" must be within the period of performance',
                is_date_value=True,
            ),
            field_rule(
                "expenditure end date",
                WhenGreaterThanZero(key="total expenditure amount", inner=DateIsInReportingPeriod()),
                'Expenditure end date "{}" must be within the reporting period',
                is_date_value=True,
            ),
            field_rule(
                "total expenditure amount",
                WhenNotBlank(
                    key="total expenditure amount",
                    inner=IsSum(
                        keys=[
                            "budgeted personnel and services diverted",
                            "covid-19 testing and contact tracing",
                            "public health expenses",
                            "payroll for public health and safety employees",
                            "other expenditure amount",
                        ]
                    ),
                ),
                'Total expenditure amount "{}" does not match the sum of its categories',
            ),
            field_rule(
                "current quarter expenditure",
                IsNumberOrBlank(),
                'Current quarter expenditure "{}" must be a number',
            ),
            field_rule(
                "total expenditure amount",
                CumulativeAmountIsEqual(
                    key="current quarter expenditure",
                    match_values={"type": "grants"},
                    match_fields={"award_number": "award number"},
                ),
                'Total expenditure amount "{}" does not match the expenditures reported across periods',
                tags={"cumulative"},
            ),
        ],
    )
)
