from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from .values import display


class ReferenceLists:
    """Read-only snapshot of the template's dropdown lists.

    Values are stored lowercased; lookups are exact membership tests against
    those lowercased values.
    """

    def __init__(self, lists: Mapping[str, Iterable[object]]):
        self._lists: Mapping[str, frozenset[str]] = MappingProxyType(
            {name: frozenset(display(v).lower() for v in values) for name, values in lists.items()}
        )

    def get(self, list_name: str) -> Optional[frozenset[str]]:
        return self._lists.get(list_name)

    def includes(self, list_name: str, value: object) -> bool:
        values = self._lists.get(list_name)
        if not values:
            return False
        return display(value).lower() in values

    def names(self) -> list[str]:
        return sorted(self._lists)

    def __contains__(self, list_name: object) -> bool:
        return list_name in self._lists
