"""JSON manifest adapter for validation runs (no I/O)."""

from .validation_manifest import ValidationInputs, validation_inputs_from_manifest

__all__ = [
    "ValidationInputs",
    "validation_inputs_from_manifest",
]
