"""Shared validation helpers for composite schema nodes."""

from surreal_schema.validation.composite import (
    FieldEntry, FieldJob, fan_out, join_results, validate_object,
)

__all__ = [
    "FieldEntry",
    "FieldJob",
    "fan_out",
    "join_results",
    "validate_object",
]
