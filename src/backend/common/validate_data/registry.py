from __future__ import annotations

from typing import Dict, Iterator, List

from .validators import TabValidator


class TabRegistry:
    """Tab validators keyed by tab name, kept in the order findings are reported."""

    def __init__(self):
        self._by_tab: Dict[str, TabValidator] = {}

    def register(self, validator: TabValidator) -> TabValidator:
        if not isinstance(validator, TabValidator):
            raise TypeError(f"Expected a TabValidator, got {type(validator).__name__}")
        if not validator.tab:
            raise ValueError("Tab validator has an empty tab name")
        if validator.tab in self._by_tab:
            raise ValueError(f"Tab already has a validator: {validator.tab}")
        self._by_tab[validator.tab] = validator
        return validator

    def create_all(self) -> List[TabValidator]:
        return list(self._by_tab.values())

    def get(self, tab: str) -> TabValidator:
        return self._by_tab[tab]

    def tabs(self) -> List[str]:
        return list(self._by_tab)

    def __contains__(self, tab: object) -> bool:
        return tab in self._by_tab

    def __iter__(self) -> Iterator[TabValidator]:
        return iter(self._by_tab.values())


registry = TabRegistry()


def register_tab(validator: TabValidator) -> TabValidator:
    return registry.register(validator)
