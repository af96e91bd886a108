"""
Batch cleaning pipeline orchestration.

Coordinates the flow: normalize + extract (per record) → median statistics
→ substitute + round → validate
"""

import time
from typing import Any, Iterable, Mapping

from src.core.cleaning import (
    UNPARSEABLE,
    FieldNormalizer,
    ImputationImpossible,
    MedianImputer,
    ParseError,
    WeightExtractor,
    round_half_away,
)
from src.core.config import CleaningConfig
from src.core.models import CleanRecord, CleaningResult, DataQualityIssue, RawRecord
from src.core.validators import RecordValidator
from src.observability.logger import get_logger, log_operation
from src.observability.metrics import record_cleaning_run, record_failed_run

logger = get_logger(__name__)

NUMERIC_FIELDS = ("weight", "price")


class CleaningPipeline:
    """
    Cleans one batch of product records.

    Flow:
    1. Pass 1, per record: categorical defaults and weight extraction
    2. Pass 2a, batch: medians of weight and price over present values
    3. Pass 2b, per record: median substitution and rounding
    4. Pass 3, batch: output checks

    The input batch is never modified; every pass builds new rows.
    """

    def __init__(self, config: CleaningConfig | None = None):
        """
        Initialize cleaning pipeline.

        Args:
            config: Cleaning defaults and checks (built-in defaults if None)
        """
        self.config = config or CleaningConfig()

        # Initialize components
        self.normalizer = FieldNormalizer(self.config)
        self.weight_extractor = WeightExtractor()
        self.imputer = MedianImputer(
            fields=self.config.imputed_fields,
            rounding_places=self.config.rounding_places,
        )
        self.validator = RecordValidator(self.config.checks)

    def run(self, records: Iterable[RawRecord | Mapping[str, Any]]) -> CleaningResult:
        """
        Clean and validate a batch.

        Args:
            records: Raw records (models or mappings with the input fields)

        Returns:
            CleaningResult with the cleaned records and the validation report

        Raises:
            ImputationImpossible: If a numeric field is missing in every record
            pydantic.ValidationError: If a mapping does not fit the input schema
        """
        batch = [self._as_raw(record) for record in records]
        started = time.perf_counter()

        try:
            with log_operation("Cleaning batch", logger=logger, records=len(batch)):
                result = self._run(batch)
        except ImputationImpossible:
            record_failed_run(time.perf_counter() - started)
            raise

        record_cleaning_run(result.report, time.perf_counter() - started)
        return result

    def _run(self, batch: list[RawRecord]) -> CleaningResult:
        # Pass 1
        rows, defaults_applied, issues = self._first_pass(batch)
        logger.info(
            f"First pass complete: {len(rows)} records, {len(issues)} parse errors",
            extra={"defaults_applied": defaults_applied},
        )

        # Pass 2: statistics are complete before any substitution begins
        statistics = self.imputer.compute_statistics(rows)
        logger.info(
            "Batch medians computed",
            extra={
                "medians": {k: str(v) for k, v in statistics.medians.items()},
                "sample_sizes": statistics.sample_sizes,
            },
        )
        completed, values_imputed = self.imputer.impute(rows, statistics)
        cleaned = [CleanRecord(**self._round_unimputed(row)) for row in completed]

        # Pass 3
        report = self.validator.validate_batch(cleaned)
        report = report.model_copy(
            update={
                "issues": issues,
                "defaults_applied": defaults_applied,
                "values_imputed": values_imputed,
                "statistics": statistics,
            }
        )

        return CleaningResult(records=cleaned, report=report)

    def _first_pass(
        self, batch: list[RawRecord]
    ) -> tuple[list[dict[str, Any]], dict[str, int], list[DataQualityIssue]]:
        """
        Normalize categorical fields and extract weights, record by record.

        Returns:
            Tuple of (partially cleaned rows, field -> defaults applied, parse issues)
        """
        rows = []
        defaults_applied = {field_name: 0 for field_name in FieldNormalizer.NORMALIZED_FIELDS}
        issues = []

        for record in batch:
            normalized, defaulted = self.normalizer.normalize(record)
            for field_name in defaulted:
                defaults_applied[field_name] += 1

            try:
                weight = self.weight_extractor.extract(record.weight, product_id=record.product_id)
            except ParseError as e:
                weight = UNPARSEABLE
                issues.append(self._parse_issue(e))
                logger.warning(
                    f"Unparseable weight for product {record.product_id}: {record.weight!r}",
                    extra={"product_id": record.product_id, "field_name": e.field_name},
                )

            rows.append(
                {
                    "product_id": record.product_id,
                    **normalized,
                    "weight": weight,
                    "price": record.price,
                }
            )

        return rows, defaults_applied, issues

    def _round_unimputed(self, row: dict[str, Any]) -> dict[str, Any]:
        """Round numeric fields that imputation is configured to leave alone."""
        for field_name in NUMERIC_FIELDS:
            if field_name in self.imputer.fields:
                continue
            value = row[field_name]
            if value is None or value is UNPARSEABLE:
                row[field_name] = None
            else:
                row[field_name] = round_half_away(value, self.config.rounding_places)
        return row

    @staticmethod
    def _parse_issue(error: ParseError) -> DataQualityIssue:
        return DataQualityIssue(
            product_id=error.product_id,
            field_name=error.field_name,
            raw_value=str(error.raw_value),
            message=str(error),
        )

    @staticmethod
    def _as_raw(record: RawRecord | Mapping[str, Any]) -> RawRecord:
        if isinstance(record, RawRecord):
            return record
        if isinstance(record, CleanRecord):
            return record.to_raw()
        return RawRecord.model_validate(dict(record))


def clean_batch(
    records: Iterable[RawRecord | Mapping[str, Any]],
    config: CleaningConfig | None = None,
) -> CleaningResult:
    """
    Clean one batch with the given (or default) configuration.

    Args:
        records: Raw records
        config: Optional cleaning configuration

    Returns:
        CleaningResult
    """
    return CleaningPipeline(config).run(records)
