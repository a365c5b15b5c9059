from __future__ import annotations

from ..predicates import IsNotBlank, IsValidDate
from ..registry import register_tab
from ..rule import field_rule
from ..validators import validate_single_record

CERTIFICATION = register_tab(
    validate_single_record(
        "certification",
        [
            field_rule(
                "agency financial reviewer name",
                IsNotBlank(),
                "Agency financial reviewer name must not be blank",
            ),
            field_rule(
                "date",
                IsValidDate(),
                'Certification date "{}" must be a valid date',
                is_date_value=True,
            ),
        ],
        'Certification requires a row with "agency financial reviewer name" and "date"',
    )
)
