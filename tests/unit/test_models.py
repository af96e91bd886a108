"""
Unit tests for Pydantic data models.

Tests record models, statistics and reports for validation, type coercion,
and constraint enforcement.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.core.models import (
    BatchStatistics,
    CleanRecord,
    CleaningResult,
    DataQualityIssue,
    RawRecord,
    ValidationReport,
)


class TestRawRecord:
    """Tests for RawRecord model"""

    def test_minimal_record(self):
        record = RawRecord(product_id=1)
        assert record.product_type is None
        assert record.weight is None
        assert record.price is None

    def test_product_id_required(self):
        with pytest.raises(ValidationError) as exc_info:
            RawRecord(brand="TopBrand")
        assert "product_id" in str(exc_info.value)

    def test_price_coerced_to_decimal(self):
        record = RawRecord(product_id=1, price="2.50")
        assert record.price == Decimal("2.50")
        assert isinstance(record.price, Decimal)

    def test_weight_text_kept_as_text(self):
        record = RawRecord(product_id=1, weight="500 grams")
        assert record.weight == "500 grams"

    def test_weight_accepts_numbers(self):
        record = RawRecord(product_id=1, weight=Decimal("400.00"))
        assert record.weight == Decimal("400.00")

    def test_invalid_price_rejected(self):
        with pytest.raises(ValidationError):
            RawRecord(product_id=1, price="cheap")

    def test_frozen(self):
        record = RawRecord(product_id=1)
        with pytest.raises(ValidationError):
            record.brand = "Other"


class TestCleanRecord:
    """Tests for CleanRecord model"""

    def test_to_raw_round_trip_fields(self):
        clean = CleanRecord(
            product_id=3,
            product_type="Unknown",
            brand="Unknown",
            weight=Decimal("400.00"),
            price=Decimal("3.25"),
            average_units_sold=0,
            year_added=2022,
            stock_location="A",
        )
        raw = clean.to_raw()

        assert isinstance(raw, RawRecord)
        assert raw.product_id == 3
        assert raw.weight == Decimal("400.00")
        assert raw.price == Decimal("3.25")
        assert raw.stock_location == "A"


class TestModelConfig:
    """Tests for model configuration shared across the package"""

    def test_clean_record_frozen(self):
        record = CleanRecord(product_id=1)
        with pytest.raises(ValidationError):
            record.price = Decimal("1")

    def test_batch_statistics_frozen(self):
        statistics = BatchStatistics(medians={"weight": Decimal("1")})
        with pytest.raises(ValidationError):
            statistics.medians = {}

    def test_schema_examples(self):
        assert RawRecord.model_json_schema()["example"]["weight"] == "500 grams"
        assert CleanRecord.model_json_schema()["example"]["stock_location"] == "A"
        assert "checks" in ValidationReport.model_json_schema()["example"]


class TestValidationReport:
    """Tests for ValidationReport model"""

    def test_passed_when_all_counts_zero(self):
        report = ValidationReport(checks={"not_null": 0, "price_positive": 0})
        assert report.passed is True
        assert report.failed_checks == []

    def test_failed_when_any_count_positive(self):
        report = ValidationReport(checks={"not_null": 0, "price_positive": 2})
        assert report.passed is False
        assert report.failed_checks == ["price_positive"]

    def test_passed_is_serialized(self):
        report = ValidationReport(total_records=1, checks={"not_null": 1})
        dumped = report.model_dump()
        assert dumped["passed"] is False
        assert dumped["checks"] == {"not_null": 1}

    def test_carries_issues_and_statistics(self):
        report = ValidationReport(
            issues=[
                DataQualityIssue(
                    product_id=5,
                    field_name="weight",
                    raw_value="abc grams",
                    message="weight: leading token 'abc' is not a number",
                )
            ],
            statistics=BatchStatistics(
                medians={"weight": Decimal("400"), "price": None},
                sample_sizes={"weight": 2, "price": 0},
            ),
        )
        assert report.issues[0].issue_type == "parse_error"
        assert report.statistics.median_weight == Decimal("400")
        assert report.statistics.median_price is None

    def test_cleaning_result_accepted(self):
        result = CleaningResult(records=[], report=ValidationReport(checks={"not_null": 0}))
        assert result.accepted
