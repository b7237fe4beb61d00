"""Per-record validation and normalization."""

from .engine import RecordValidator, ValidationResult

__all__ = ["RecordValidator", "ValidationResult"]
