"""
Core data models for the product cleaning pipeline.

All models use Pydantic for runtime validation and type safety.
"""

from .batch_statistics import BatchStatistics
from .product_record import PRODUCT_FIELDS, CleanRecord, RawRecord
from .validation_report import CleaningResult, DataQualityIssue, ValidationReport

__all__ = [
    "PRODUCT_FIELDS",
    "RawRecord",
    "CleanRecord",
    "BatchStatistics",
    "DataQualityIssue",
    "ValidationReport",
    "CleaningResult",
]
