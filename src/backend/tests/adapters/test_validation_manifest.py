import json
from datetime import date
from pathlib import Path

import pytest

from adapters.manifest import validation_inputs_from_manifest
from common.validate_data.errors import ManifestError


FIXTURE_DIR = Path(__file__).parent / "fixtures" / "validation_manifest"


def _load_manifest() -> dict:
    return json.loads((FIXTURE_DIR / "sample_upload.json").read_text(encoding="utf-8"))


def test_manifest_parses_records_and_period():
    inputs = validation_inputs_from_manifest(_load_manifest())
    assert [r.tab for r in inputs.records] == ["certification", "cover", "subrecipient", "grants"]
    assert inputs.records[2].row == 2
    assert inputs.records[2].fields["legal name"] == "Payee"
    assert inputs.reporting_period.end_date == date(2020, 9, 30)
    assert inputs.tags == frozenset({"cumulative"})
    assert inputs.file_parts == {"agencyCode": "007", "projectId": "DOH"}
    assert inputs.meta["filename"].startswith("DOH")


def test_manifest_parses_summaries_and_reference_lists():
    inputs = validation_inputs_from_manifest(_load_manifest())
    (summary,) = inputs.period_summaries
    assert summary.attributes == {"type": "grants", "award_number": "A1"}
    assert summary.current_amount("current quarter expenditure") == 300
    assert inputs.reference_lists.includes("state code", "wa")


def test_manifest_without_reference_lists_or_tags():
    manifest = _load_manifest()
    del manifest["reference_lists"]
    del manifest["reporting_period"]["validation_rule_tags"]
    inputs = validation_inputs_from_manifest(manifest)
    assert inputs.reference_lists is None
    assert inputs.tags is None


def test_manifest_accepts_single_tag_string():
    manifest = _load_manifest()
    manifest["reporting_period"]["validation_rule_tags"] = "cumulative"
    inputs = validation_inputs_from_manifest(manifest)
    assert inputs.tags == frozenset({"cumulative"})


def test_manifest_accepts_numeric_string_rows():
    manifest = _load_manifest()
    manifest["records"][0]["row"] = "7"
    inputs = validation_inputs_from_manifest(manifest)
    assert inputs.records[0].row == 7


@pytest.mark.parametrize(
    "mutate",
    [
        lambda m: m.pop("reporting_period"),
        lambda m: m["reporting_period"].update(end_date="not a date"),
        lambda m: m.pop("records"),
        lambda m: m["records"].append({"row": 9, "fields": {}}),
        lambda m: m["records"].append({"tab": "cover", "fields": ["a"]}),
        lambda m: m.update(period_summaries={"type": "grants"}),
        lambda m: m.update(reference_lists=["state code"]),
        lambda m: m["records"].append({"tab": "grants", "row": "three", "fields": {}}),
        lambda m: m["records"].append({"tab": "grants", "sourceRow": [3], "fields": {}}),
        lambda m: m["reporting_period"].update(validation_rule_tags=5),
    ],
)
def test_malformed_manifest_is_rejected(mutate):
    manifest = _load_manifest()
    mutate(manifest)
    with pytest.raises(ManifestError):
        validation_inputs_from_manifest(manifest)
