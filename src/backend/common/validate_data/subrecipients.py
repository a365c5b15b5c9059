from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional

from .models import Record
from .values import display, is_blank

# Fields that identify a subrecipient, in order of preference.
SUBRECIPIENT_KEY_FIELDS = ("identification number", "duns number", "ein number")


def subrecipient_key(fields: Mapping[str, Any]) -> Optional[str]:
    for name in SUBRECIPIENT_KEY_FIELDS:
        val = fields.get(name)
        if not is_blank(val):
            return display(val)
    return None


def compute_subrecipient_lookup(records: Optional[Iterable[Record]]) -> Dict[str, Mapping[str, Any]]:
    """Index subrecipient rows by identifier; the first row for an identifier wins."""
    lookup: Dict[str, Mapping[str, Any]] = {}
    for record in records or ():
        key = subrecipient_key(record.fields)
        if key is None or key in lookup:
            continue
        lookup[key] = dict(record.fields)
    return lookup
