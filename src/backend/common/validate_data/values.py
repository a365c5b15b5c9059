"""Coercion helpers shared by predicates and message formatting.

Spreadsheet cells arrive as strings, numbers, dates or nothing at all. These
helpers turn them into the handful of shapes the rules compare against and
never raise on malformed input; unusable values come back as ``None`` (or the
documented fallback) instead.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Any, Iterable, Optional

CENT = Decimal("0.01")
# Digits needed to hold any float amount, and sums of them, to the cent.
AMOUNT_PRECISION = 400

# Spreadsheet serial day 1 is 1900-01-01; serials after the phantom 1900-02-29 shift by one.
_SERIAL_EPOCH = date(1899, 12, 30)
_SERIAL_EPOCH_PRE_LEAP = date(1899, 12, 31)

_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_DATE_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%y",
    "%Y/%m/%d",
    "%m-%d-%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def is_number(value: Any) -> bool:
    if isinstance(value, Decimal):
        return not value.is_nan()
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


def parse_leading_float(value: Any) -> Optional[float]:
    """Parse the numeric prefix of a value ("12.5abc" -> 12.5)."""
    if is_number(value):
        parsed = float(value)
        return None if parsed != parsed else parsed
    if not isinstance(value, str):
        return None
    match = _LEADING_FLOAT.match(value)
    if not match:
        return None
    return float(match.group(1))


def to_number(value: Any) -> Optional[float]:
    """Strict numeric conversion; the whole value must be numeric. Blank is 0."""
    if isinstance(value, bool):
        return float(value)
    if is_number(value):
        parsed = float(value)
        return None if parsed != parsed else parsed
    if value is None:
        return 0.0
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return 0.0
    try:
        parsed = float(text)
    except ValueError:
        return None
    return None if parsed != parsed else parsed


def round_amount(value: Any) -> Optional[Decimal]:
    """Round to cents; None when the amount is not finite or too large to round."""
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            return None
    if not amount.is_finite():
        return None
    with localcontext() as dctx:
        dctx.prec = AMOUNT_PRECISION
        try:
            return amount.quantize(CENT, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            return None


def sum_amounts(amounts: Iterable[Decimal]) -> Optional[Decimal]:
    """Total of the amounts; None when the total is not a finite number."""
    total = Decimal("0")
    with localcontext() as dctx:
        dctx.prec = AMOUNT_PRECISION
        try:
            for amount in amounts:
                total += amount
        except InvalidOperation:
            return None
    return total if total.is_finite() else None


def display(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def serial_to_date(serial: float) -> Optional[date]:
    if serial != serial or serial < 1:
        return None
    days = int(serial)
    if days == 60:
        return None
    try:
        if days < 60:
            return _SERIAL_EPOCH_PRE_LEAP + timedelta(days=days)
        return _SERIAL_EPOCH + timedelta(days=days)
    except OverflowError:
        return None


def parse_date(value: Any) -> Optional[date]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if is_number(value):
        return serial_to_date(float(value))
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def is_valid_date(value: Any) -> bool:
    if is_number(value):
        return True
    return parse_date(value) is not None


def format_us_date(value: date) -> str:
    return value.strftime("%m/%d/%Y")
