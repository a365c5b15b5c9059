from __future__ import annotations

from typing import Any, List, Optional, Sequence

from .context import ValidationContext
from .models import Finding, Record
from .rule import FieldRule, RuleOptions
from .values import display, format_us_date, is_blank, is_number, parse_date


def include_rule(options: Optional[RuleOptions], ctx: ValidationContext) -> bool:
    if options is None or options.tags is None:
        return True
    if not ctx.tags:
        return False
    return not options.tags.isdisjoint(ctx.tags)


def message_value(value: Any, options: Optional[RuleOptions] = None) -> Any:
    if options is None or not options.is_date_value or is_blank(value):
        return value
    if is_number(value) and not value:
        return value
    dt = parse_date(value)
    return value if dt is None else format_us_date(dt)


def add_value_to_message(message: str, value: Any) -> str:
    return message.replace("{}", display(value), 1)


def validate_fields(
    rules: Sequence[FieldRule],
    record: Record,
    tab: str,
    row: Optional[int],
    ctx: ValidationContext,
) -> List[Finding]:
    findings: List[Finding] = []
    for rule in rules:
        if not include_rule(rule.options, ctx):
            continue
        value = record.value(rule.field_key)
        if rule.predicate(value, record, ctx):
            continue
        findings.append(
            Finding(
                message=add_value_to_message(
                    rule.message_template(),
                    message_value(value, rule.options),
                ),
                tab=tab,
                row=row,
            )
        )
    return findings
