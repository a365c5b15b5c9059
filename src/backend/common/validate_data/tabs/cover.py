from __future__ import annotations

from ..predicates import IsNotBlank, MatchesFilePart
from ..registry import register_tab
from ..rule import field_rule
from ..validators import validate_single_record

COVER = register_tab(
    validate_single_record(
        "cover",
        [
            field_rule("agency code", IsNotBlank(), "Agency code must not be blank"),
            field_rule(
                "agency code",
                MatchesFilePart(key="agencyCode"),
                'The agency code "{}" in the file name does not match the cover\'s agency code',
            ),
            field_rule("project id", IsNotBlank(), "Project id must not be blank"),
            field_rule(
                "project id",
                MatchesFilePart(key="projectId"),
                'The project id "{}" in the file name does not match the cover\'s project id',
            ),
        ],
        'Cover requires a row with "agency code" and "project id"',
    )
)
