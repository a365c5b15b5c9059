import pytest

from common.validate_data.models import group_records
from common.validate_data.predicates import IsNotBlank
from common.validate_data.rule import field_rule
from common.validate_data.validators import (
    AllRecordsValidator,
    SingleRecordValidator,
    validate_all_records,
    validate_single_record,
)

RULES = [field_rule("name", IsNotBlank())]


def test_validates_every_record_in_order(make_record, ctx):
    records = [
        make_record({"name": "George"}, row=2),
        make_record({"name": ""}, row=3),
        make_record({"name": "Thomas"}, row=4),
        make_record({"name": "James"}, row=5),
        make_record({}, row=6),
    ]
    findings = validate_all_records("test", RULES)(group_records(records), ctx)
    assert [f.row for f in findings] == [3, 6]
    assert all(f.tab == "test" for f in findings)


def test_all_records_with_no_records(ctx):
    assert validate_all_records("test", RULES)({}, ctx) == []


@pytest.mark.parametrize("count", [0, 2, 3])
def test_single_record_requires_exactly_one(count, make_record, ctx):
    records = [make_record({"name": "x"}, tab="cover", row=2 + i) for i in range(count)]
    validator = validate_single_record("cover", RULES, "Cover must have exactly one row")
    findings = validator(group_records(records), ctx)
    assert len(findings) == 1
    assert findings[0].message == "Cover must have exactly one row"
    assert findings[0].tab == "cover"
    assert findings[0].row is None


def test_single_record_reports_row_two(make_record, ctx):
    records = [make_record({"name": ""}, tab="cover", row=17)]
    findings = validate_single_record("cover", RULES, "missing")(group_records(records), ctx)
    assert [(f.message, f.row) for f in findings] == [('Empty or invalid entry for name: ""', 2)]


def test_single_record_valid(make_record, ctx):
    records = [make_record({"name": "ok"}, tab="cover")]
    assert validate_single_record("cover", RULES, "missing")(group_records(records), ctx) == []


def test_validators_serialize_with_kind():
    assert AllRecordsValidator(tab="a", rules=RULES).model_dump()["kind"] == "all_records"
    dumped = SingleRecordValidator(tab="b", rules=RULES, missing_message="m").model_dump(mode="json")
    assert dumped["kind"] == "single_record"
    assert dumped["rules"][0]["predicate"] == {"kind": "is_not_blank"}
