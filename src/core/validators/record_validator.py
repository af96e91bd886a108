"""
RecordValidator - checks a cleaned batch against the output contract.

Builds field rules from the configured checks, applies them to every
record and counts the records that violate each check.
"""

from typing import Any, Iterable, Mapping, Sequence

from pydantic import BaseModel

from src.core.config import CheckRule, default_checks
from src.core.models import CleanRecord, ValidationReport
from src.observability.logger import get_logger

from .base_validator import BaseValidator, ValidationViolation
from .range_validator import RangeValidator
from .required_field_validator import RequiredFieldValidator
from .unique_validator import UniqueValidator

logger = get_logger(__name__)


class RecordValidator:
    """
    Applies named checks to a cleaned batch.

    A check is a list of field rules; a record violates the check when at
    least one of its rules fails, so every check reports a count of
    violating records, not of failed rules.
    """

    VALIDATOR_REGISTRY = {
        "required_field": RequiredFieldValidator,
        "range": RangeValidator,
        "unique": UniqueValidator,
    }

    def __init__(self, checks: dict[str, list[CheckRule]] | None = None):
        """
        Initialize the validator with check definitions.

        Args:
            checks: Check name -> rules (the default output contract if None)
        """
        self.checks = checks if checks is not None else default_checks()
        self.validators: dict[str, list[BaseValidator]] = {}
        self._build_validators()

    def _build_validators(self) -> None:
        """Build validator instances from rule configurations."""
        for check_name, rules in self.checks.items():
            built = []
            for rule in rules:
                # Skip disabled rules
                if not rule.enabled:
                    continue

                validator_class = self.VALIDATOR_REGISTRY.get(rule.rule_type)
                if not validator_class:
                    raise ValueError(f"Unknown rule type: {rule.rule_type}")

                try:
                    built.append(validator_class(rule.field_name, rule.parameters))
                except ValueError as e:
                    raise ValueError(f"Failed to create validator for rule '{rule.rule_name}': {e}") from e

            self.validators[check_name] = built

    @staticmethod
    def _as_mapping(record: CleanRecord | Mapping[str, Any]) -> Mapping[str, Any]:
        if isinstance(record, BaseModel):
            return record.model_dump()
        return record

    def violations(self, record: CleanRecord | Mapping[str, Any]) -> dict[str, list[ValidationViolation]]:
        """
        Collect the violations of one record, grouped by check.

        Args:
            record: A cleaned record or a mapping with the same fields

        Returns:
            Check name -> violations (only checks that failed)
        """
        payload = self._as_mapping(record)
        found: dict[str, list[ValidationViolation]] = {}

        for check_name, validators in self.validators.items():
            failed = [v for v in (validator.find_violation(payload) for validator in validators) if v]
            if failed:
                found[check_name] = failed

        return found

    def count_violations(self, records: Iterable[CleanRecord | Mapping[str, Any]]) -> dict[str, int]:
        """
        Count violating records per check.

        Args:
            records: Cleaned batch

        Returns:
            Check name -> number of violating records (zero for clean checks)
        """
        counts = {check_name: 0 for check_name in self.validators}
        for validators in self.validators.values():
            for validator in validators:
                validator.start_batch()

        for record in records:
            for check_name, failed in self.violations(record).items():
                counts[check_name] += 1
                logger.debug(
                    f"Check '{check_name}' failed for product {failed[0].product_id}: "
                    + "; ".join(str(v) for v in failed),
                    extra={"check": check_name, "product_id": failed[0].product_id},
                )

        return counts

    def validate_batch(self, records: Sequence[CleanRecord | Mapping[str, Any]]) -> ValidationReport:
        """
        Validate a cleaned batch.

        Args:
            records: Cleaned batch

        Returns:
            ValidationReport carrying the per-check counts
        """
        counts = self.count_violations(records)
        report = ValidationReport(total_records=len(records), checks=counts)

        if report.passed:
            logger.info(f"Validation passed for {len(records)} records")
        else:
            logger.warning(
                f"Validation failed checks: {report.failed_checks}",
                extra={"checks": counts},
            )

        return report

    def get_check_summary(self) -> dict[str, Any]:
        """
        Get summary of loaded checks.

        Returns:
            Dictionary with rule counts per check and per rule type
        """
        by_type: dict[str, int] = {}
        for validators in self.validators.values():
            for validator in validators:
                by_type[validator.rule_type] = by_type.get(validator.rule_type, 0) + 1

        return {
            "total_checks": len(self.validators),
            "rules_per_check": {name: len(v) for name, v in self.validators.items()},
            "rules_by_type": by_type,
        }
