from common.validate_data.executor import include_rule, message_value, validate_fields
from common.validate_data.predicates import IsNotBlank, IsOneOf, IsValidDate
from common.validate_data.rule import RuleOptions, field_rule

REQUIRED_FIELDS = [
    field_rule("name", IsNotBlank()),
    field_rule("date", IsValidDate()),
    field_rule("description", IsNotBlank(), "Description is required"),
]


def test_valid_record_has_no_findings(make_record, ctx):
    record = make_record({"name": "George", "date": "2020-10-02", "description": "testing"})
    assert validate_fields(REQUIRED_FIELDS, record, "Test", 1, ctx) == []


def test_reports_multiple_findings_with_custom_message(make_record, ctx):
    record = make_record({"name": "", "date": "2020-10-02"})
    findings = validate_fields(REQUIRED_FIELDS, record, "Test", 5, ctx)
    assert [f.message for f in findings] == [
        'Empty or invalid entry for name: ""',
        "Description is required",
    ]
    assert all(f.tab == "Test" and f.row == 5 for f in findings)


def test_cover_example(make_record, ctx):
    record = make_record({"name": "", "date": "2020-10-02", "description": "x"}, tab="cover")
    findings = validate_fields(REQUIRED_FIELDS, record, "cover", 2, ctx)
    assert len(findings) == 1
    assert findings[0].model_dump() == {
        "message": 'Empty or invalid entry for name: ""',
        "tab": "cover",
        "row": 2,
    }


def test_message_includes_invalid_value(make_record, ctx):
    rules = [field_rule("type", IsOneOf(values=["FOO", "BAR"]), 'Type "{}" is not valid')]
    findings = validate_fields(rules, make_record({"type": "BAZ"}), "Test", 5, ctx)
    assert [f.message for f in findings] == ['Type "BAZ" is not valid']


def test_absent_value_reaches_predicate_as_empty_string(make_record, ctx):
    seen = []

    class Spy(IsNotBlank):
        def __call__(self, value, record, context):
            seen.append(value)
            return True

    validate_fields([field_rule("missing", Spy()), field_rule("none", Spy())], make_record({"none": None}), "t", 2, ctx)
    assert seen == ["", ""]


def test_date_values_are_formatted_in_messages():
    assert message_value(44195, RuleOptions(is_date_value=True)) == "12/30/2020"
    assert message_value("2020-10-02", RuleOptions(is_date_value=True)) == "10/02/2020"
    assert message_value("Friday", RuleOptions(is_date_value=True)) == "Friday"
    assert message_value(44195) == 44195
    assert message_value("", RuleOptions(is_date_value=True)) == ""


def test_date_message_for_failed_rule(make_record, ctx):
    rules = [field_rule("date", IsOneOf(values=[]), 'Date "{}" is late', is_date_value=True)]
    findings = validate_fields(rules, make_record({"date": 44195}), "t", 3, ctx)
    assert findings[0].message == 'Date "12/30/2020" is late'


def test_untagged_rules_always_apply(make_ctx):
    assert include_rule(RuleOptions(), make_ctx()) is True
    assert include_rule(RuleOptions(), make_ctx(tags={"Y"})) is True
    assert include_rule(None, make_ctx()) is True


def test_tagged_rules_need_matching_context_tag(make_ctx):
    options = RuleOptions(tags=frozenset({"X"}))
    assert include_rule(options, make_ctx()) is False
    assert include_rule(options, make_ctx(tags=set())) is False
    assert include_rule(options, make_ctx(tags={"Y"})) is False
    assert include_rule(options, make_ctx(tags={"X"})) is True
    assert include_rule(options, make_ctx(tags={"X", "Y"})) is True


def test_skipped_rules_are_not_evaluated(make_record, make_ctx):
    calls = []

    class Spy(IsNotBlank):
        def __call__(self, value, record, context):
            calls.append(value)
            return False

    rules = [field_rule("name", Spy(), tags={"X"})]
    assert validate_fields(rules, make_record({"name": "a"}), "t", 2, make_ctx(tags={"Y"})) == []
    assert calls == []
    assert len(validate_fields(rules, make_record({"name": "a"}), "t", 2, make_ctx(tags={"X"}))) == 1
