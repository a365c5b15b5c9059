"""Rule engine for validating report spreadsheet data.

This package intentionally contains only validation logic:
- Inputs are records already parsed from the upload, plus period metadata.
- No spreadsheet parsing, persistence, or network calls live here.
"""

from .config import ValidationConfig, get_validation_config
from .context import ValidationContext, build_context
from .errors import UnknownTabError, ValidationContextError, ValidationEngineError
from .models import (
    Finding,
    PeriodSummary,
    Record,
    RecordSet,
    ReportingPeriod,
    ValidationItem,
    group_records,
)
from .reference import ReferenceLists
from .rule import FieldRule, RuleOptions, field_rule
from .runner import ValidationRunner, validate_data
from .validators import (
    AllRecordsValidator,
    SingleRecordValidator,
    TabValidator,
    validate_all_records,
    validate_single_record,
)

# Import default catalogs so they self-register with the global registry.
from . import tabs as _default_tabs  # noqa: F401
