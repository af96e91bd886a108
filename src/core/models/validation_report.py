"""
ValidationReport model representing the outcome of cleaning and validating a batch.
"""

from typing import Any, List, Literal

from pydantic import BaseModel, Field, computed_field

from .batch_statistics import BatchStatistics
from .product_record import CleanRecord


class DataQualityIssue(BaseModel):
    """
    A recoverable, per-record data-quality flag raised during cleaning.

    Attributes:
        product_id: Record the issue belongs to
        field_name: Offending field
        issue_type: Issue category
        raw_value: Value as ingested
        message: Human readable description
    """

    product_id: int
    field_name: str
    issue_type: Literal["parse_error"] = "parse_error"
    raw_value: Any = None
    message: str


class ValidationReport(BaseModel):
    """
    Outcome of validating a cleaned batch.

    Note: the report is diagnostic only. A failed check never blocks
    production of the cleaned batch, it is surfaced to the caller.

    Attributes:
        total_records: Number of records in the batch
        checks: Check name -> number of violating records
        issues: Per-record data-quality issues collected during cleaning
        defaults_applied: Field -> number of records resolved via a default rule
        values_imputed: Field -> number of records filled with the batch median
        statistics: Medians used for imputation
    """

    total_records: int = 0
    checks: dict[str, int] = Field(default_factory=dict)
    issues: List[DataQualityIssue] = Field(default_factory=list)
    defaults_applied: dict[str, int] = Field(default_factory=dict)
    values_imputed: dict[str, int] = Field(default_factory=dict)
    statistics: BatchStatistics | None = None

    @computed_field
    @property
    def passed(self) -> bool:
        """True only if every check has zero violations."""
        return all(count == 0 for count in self.checks.values())

    @property
    def failed_checks(self) -> list[str]:
        return [name for name, count in self.checks.items() if count > 0]

    class Config:
        json_schema_extra = {
            "example": {
                "total_records": 1500,
                "checks": {
                    "not_null": 0,
                    "weight_positive": 0,
                    "price_positive": 3,
                },
                "issues": [
                    {
                        "product_id": 17,
                        "field_name": "weight",
                        "issue_type": "parse_error",
                        "raw_value": "approx. 500 grams",
                        "message": "leading token 'approx.' is not a number",
                    }
                ],
                "defaults_applied": {"brand": 42, "year_added": 7},
                "values_imputed": {"weight": 5, "price": 11},
                "passed": False,
            }
        }


class CleaningResult(BaseModel):
    """Cleaned batch plus its validation report (owned by the caller)."""

    records: List[CleanRecord] = Field(default_factory=list)
    report: ValidationReport

    @property
    def accepted(self) -> bool:
        return self.report.passed
