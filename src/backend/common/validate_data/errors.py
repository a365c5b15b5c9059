from __future__ import annotations


class ValidationEngineError(ValueError):
    """Caller-contract violation. Never used for data-driven findings."""


class UnknownTabError(ValidationEngineError):
    def __init__(self, tabs):
        self.tabs = tuple(sorted(tabs))
        super().__init__(f"Records reference tabs with no configured validator: {', '.join(self.tabs)}")


class ValidationContextError(ValidationEngineError):
    pass


class ManifestError(ValidationEngineError):
    pass
