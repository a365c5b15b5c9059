from __future__ import annotations

from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field

from .conditions import AnyPredicate

DEFAULT_MESSAGE = 'Empty or invalid entry for {key}: "{{}}"'


class RuleOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Rule only runs when these intersect the run's active tags. None: always runs.
    tags: Optional[FrozenSet[str]] = None
    is_date_value: bool = False


class FieldRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    field_key: str
    predicate: AnyPredicate
    # "{}" is replaced by the offending value.
    message: Optional[str] = None
    options: RuleOptions = Field(default_factory=RuleOptions)

    def message_template(self) -> str:
        return self.message or DEFAULT_MESSAGE.format(key=self.field_key)


def field_rule(
    field_key: str,
    predicate,
    message: Optional[str] = None,
    *,
    tags=None,
    is_date_value: bool = False,
) -> FieldRule:
    return FieldRule(
        field_key=field_key,
        predicate=predicate,
        message=message,
        options=RuleOptions(
            tags=frozenset(tags) if tags is not None else None,
            is_date_value=is_date_value,
        ),
    )
