import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from datetime import date

import pytest

from common.validate_data.context import build_context
from common.validate_data.models import Record, ReportingPeriod
from common.validate_data.reference import ReferenceLists


@pytest.fixture
def reporting_period() -> ReportingPeriod:
    return ReportingPeriod(
        start_date=date(2020, 3, 1),
        end_date=date(2020, 12, 30),
        period_of_performance_end_date=date(2020, 12, 30),
    )


@pytest.fixture
def make_record():
    def _make(fields=None, *, tab: str = "test", row: int | None = 2) -> Record:
        return Record(tab=tab, fields=fields or {}, row=row)

    return _make


@pytest.fixture
def make_ctx(reporting_period):
    def _make(
        *,
        file_parts=None,
        subrecipients=None,
        tags=None,
        period_summaries=(),
        reference_lists=None,
    ):
        return build_context(
            file_parts=file_parts if file_parts is not None else {"projectId": "DOH"},
            reporting_period=reporting_period,
            subrecipients=subrecipients if subrecipients is not None else {"1010": {"name": "Payee"}},
            tags=tags,
            period_summaries=period_summaries,
            reference_lists=reference_lists,
        )

    return _make


@pytest.fixture
def ctx(make_ctx):
    return make_ctx()


@pytest.fixture
def reference_lists() -> ReferenceLists:
    return ReferenceLists(
        {
            "state code": ["WA", "OR", "CA"],
            "country": ["United States", "Canada"],
            "organization type": ["City or Township Government", "Non-Profit"],
        }
    )
