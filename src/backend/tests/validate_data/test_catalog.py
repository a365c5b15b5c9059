import json

import yaml

from common.validate_data.catalog import build_catalog, main
from common.validate_data.rule import FieldRule
from common.validate_data.tabs import GRANTS


def test_catalog_lists_registered_tabs_in_order():
    entries = build_catalog()
    assert [e.tab for e in entries] == ["certification", "cover", "subrecipient", "grants"]
    assert entries[0].validator_kind == "single_record"
    assert entries[0].missing_message
    assert entries[2].validator_kind == "all_records"
    assert entries[2].missing_message == ""


def test_catalog_rules_reload_into_equal_rules():
    entry = next(e for e in build_catalog() if e.tab == "grants")
    restored = [FieldRule.model_validate(raw) for raw in entry.rules]
    assert restored == GRANTS.rules


def test_tagged_rule_is_dumped_with_tags():
    entry = next(e for e in build_catalog() if e.tab == "grants")
    tagged = [raw for raw in entry.rules if raw["options"].get("tags")]
    assert len(tagged) == 1
    assert tagged[0]["options"]["tags"] == ["cumulative"]
    assert tagged[0]["predicate"]["kind"] == "cumulative_amount_is_equal"


def test_main_prints_json(capsys):
    main(["--format", "json"])
    payload = json.loads(capsys.readouterr().out)
    assert payload[1]["tab"] == "cover"


def test_main_prints_yaml(capsys):
    main([])
    payload = yaml.safe_load(capsys.readouterr().out)
    assert payload[3]["tab"] == "grants"
