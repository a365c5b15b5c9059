from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from .config import ValidationConfig
from .context import ValidationContext, build_context
from .errors import UnknownTabError
from .models import Finding, PeriodSummary, Record, RecordSet, ReportingPeriod, group_records
from .reference import ReferenceLists
from .registry import registry
from .subrecipients import compute_subrecipient_lookup
from .validators import TabValidator

logger = logging.getLogger(__name__)


class ValidationRunner:
    def __init__(
        self,
        validators: Optional[Iterable[TabValidator]] = None,
        config: Optional[ValidationConfig] = None,
    ):
        self._validators = list(validators) if validators is not None else registry.create_all()
        self._config = config or ValidationConfig()

    @property
    def config(self) -> ValidationConfig:
        return self._config

    def run(self, records: Union[RecordSet, Iterable[Record]], ctx: ValidationContext) -> List[Finding]:
        record_set = records if isinstance(records, Mapping) else group_records(records)
        self._check_tabs(record_set)

        limit = self._config.max_findings_per_tab
        findings: List[Finding] = []
        for validator in self._validators:
            tab_findings = validator(record_set, ctx)
            logger.debug(
                "Tab %s: %d records, %d findings",
                validator.tab,
                len(record_set.get(validator.tab, ())),
                len(tab_findings),
            )
            if len(tab_findings) > limit:
                logger.debug("Tab %s: keeping first %d of %d findings", validator.tab, limit, len(tab_findings))
            findings.extend(tab_findings[:limit])
        return findings

    def _check_tabs(self, record_set: RecordSet) -> None:
        if self._config.allow_unknown_tabs:
            return
        known = {v.tab for v in self._validators}
        # The subrecipient tab feeds the context even when no catalog validates it.
        known.add(self._config.subrecipient_tab)
        unknown = [tab for tab in record_set if tab not in known]
        if unknown:
            raise UnknownTabError(unknown)


def validate_data(
    records: Iterable[Record],
    *,
    file_parts: Mapping[str, Any],
    reporting_period: Union[ReportingPeriod, Mapping[str, Any]],
    period_summaries: Iterable[Union[PeriodSummary, Mapping[str, Any]]] = (),
    tags: Optional[Iterable[str]] = None,
    reference_lists: Optional[ReferenceLists] = None,
    validators: Optional[Iterable[TabValidator]] = None,
    config: Optional[ValidationConfig] = None,
) -> List[Finding]:
    """Validate one upload's records and return findings, at most N per tab."""
    cfg = config or ValidationConfig()
    record_set = group_records(records)
    ctx = build_context(
        file_parts=file_parts,
        reporting_period=reporting_period,
        subrecipients=compute_subrecipient_lookup(record_set.get(cfg.subrecipient_tab)),
        tags=tags,
        period_summaries=period_summaries,
        reference_lists=reference_lists,
        config=cfg,
    )
    return ValidationRunner(validators, cfg).run(record_set, ctx)
