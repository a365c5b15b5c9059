from __future__ import annotations

from ..conditions import WhenBlank, WhenUS
from ..predicates import (
    DropdownIncludes,
    HasSubrecipientKey,
    IsNotBlank,
    IsValidState,
    IsValidZip,
)
from ..registry import register_tab
from ..rule import field_rule
from ..validators import validate_all_records

SUBRECIPIENT = register_tab(
    validate_all_records(
        "subrecipient",
        [
            field_rule(
                "identification number",
                HasSubrecipientKey(),
                "Each subrecipient must have either an identification number, a DUNS number or an EIN",
            ),
            field_rule(
                "duns number",
                WhenBlank(key="identification number", inner=WhenBlank(key="ein number", inner=IsNotBlank())),
                "A DUNS number is required when no identification number or EIN is given",
            ),
            field_rule("legal name", IsNotBlank(), "Legal name must not be blank"),
            field_rule("address line 1", IsNotBlank(), "Address line 1 must not be blank"),
            field_rule("city name", IsNotBlank(), "City name must not be blank"),
            field_rule(
                "state code",
                WhenUS(key="country name", inner=IsValidState()),
                'State code "{}" is not valid',
            ),
            field_rule(
                "zip",
                WhenUS(key="country name", inner=IsValidZip()),
                'Zip "{}" is not valid',
            ),
            field_rule(
                "country name",
                DropdownIncludes(list_name="country"),
                'Country name "{}" is not valid',
            ),
            field_rule(
                "organization type",
                DropdownIncludes(list_name="organization type"),
                'Organization type "{}" is not valid',
            ),
        ],
    )
)
