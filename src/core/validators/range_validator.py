"""
RangeValidator - numeric values must lie inside configured bounds.
"""

from decimal import Decimal
from numbers import Number
from typing import Any, Mapping

from .base_validator import BaseValidator, ValidationViolation


class RangeValidator(BaseValidator):
    """
    Checks a numeric field against optional bounds.

    Parameters:
    - min: Minimum value (inclusive)
    - max: Maximum value (inclusive)
    - min_exclusive: Minimum value (exclusive), e.g. 0 for "must be positive"
    - max_exclusive: Maximum value (exclusive)

    Null values pass; nulls are the required_field rule's concern.
    """

    BOUNDS = ("min", "max", "min_exclusive", "max_exclusive")

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        if all(self.parameters.get(bound) is None for bound in self.BOUNDS):
            raise ValueError(f"RangeValidator requires at least one of: {', '.join(self.BOUNDS)}")

        # Bounds compare against Decimal field values
        self.bounds = {
            bound: Decimal(str(self.parameters[bound]))
            for bound in self.BOUNDS
            if self.parameters.get(bound) is not None
        }

    def validate(self, value: Any, record: Mapping[str, Any]) -> None:
        if value is None:
            return

        if isinstance(value, bool) or not isinstance(value, Number):
            raise ValidationViolation(
                self.rule_type, self.field_name, f"value must be numeric, got {type(value).__name__}"
            )

        number = Decimal(str(value))
        bounds = self.bounds

        if "min" in bounds and number < bounds["min"]:
            raise ValidationViolation(
                self.rule_type, self.field_name, f"{number} is less than minimum {bounds['min']}"
            )
        if "min_exclusive" in bounds and number <= bounds["min_exclusive"]:
            raise ValidationViolation(
                self.rule_type, self.field_name, f"{number} must be greater than {bounds['min_exclusive']}"
            )
        if "max" in bounds and number > bounds["max"]:
            raise ValidationViolation(
                self.rule_type, self.field_name, f"{number} exceeds maximum {bounds['max']}"
            )
        if "max_exclusive" in bounds and number >= bounds["max_exclusive"]:
            raise ValidationViolation(
                self.rule_type, self.field_name, f"{number} must be less than {bounds['max_exclusive']}"
            )

    @property
    def rule_type(self) -> str:
        return "range"
