from __future__ import annotations

import os
from datetime import date

from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()


class ValidationConfig(BaseModel):
    # Findings kept per tab before all tabs are flattened into one list.
    max_findings_per_tab: int = Field(default=100, ge=0)
    subrecipient_tab: str = "subrecipient"
    first_reporting_period_start_date: date = date(2020, 3, 1)
    # If false, records on a tab with no configured validator raise UnknownTabError.
    allow_unknown_tabs: bool = False


def get_validation_config() -> ValidationConfig:
    """
    Load engine configuration from environment variables.

    Reads:
      VALIDATION_MAX_FINDINGS_PER_TAB, VALIDATION_ALLOW_UNKNOWN_TABS,
      VALIDATION_FIRST_PERIOD_START
    """
    raw: dict[str, object] = {}
    max_findings = os.getenv("VALIDATION_MAX_FINDINGS_PER_TAB", "").strip()
    if max_findings:
        raw["max_findings_per_tab"] = max_findings
    allow_unknown = os.getenv("VALIDATION_ALLOW_UNKNOWN_TABS", "").strip().lower()
    if allow_unknown:
        raw["allow_unknown_tabs"] = allow_unknown in ("1", "true", "yes", "on")
    first_start = os.getenv("VALIDATION_FIRST_PERIOD_START", "").strip()
    if first_start:
        raw["first_reporting_period_start_date"] = first_start
    return ValidationConfig.model_validate(raw)
