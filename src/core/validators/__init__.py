"""
Output checks for cleaned batches.

Provides field rules for required fields, numeric ranges and unique values, and the
record validator that aggregates them into per-check violation counts.
"""

from .base_validator import BaseValidator, ValidationViolation
from .range_validator import RangeValidator
from .record_validator import RecordValidator
from .required_field_validator import RequiredFieldValidator
from .unique_validator import UniqueValidator

__all__ = [
    "BaseValidator",
    "ValidationViolation",
    "RequiredFieldValidator",
    "RangeValidator",
    "UniqueValidator",
    "RecordValidator",
]
