"""
RequiredFieldValidator - a cleaned field must not be null.
"""

from typing import Any, Mapping

from .base_validator import BaseValidator, ValidationViolation


class RequiredFieldValidator(BaseValidator):
    """
    Fails when the field is absent from the record or null.

    Parameters:
    - allow_empty_string: accept "" as a value (default False)
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)
        self.allow_empty_string = self.parameters.get("allow_empty_string", False)

    def validate(self, value: Any, record: Mapping[str, Any]) -> None:
        if self.field_name not in record:
            raise ValidationViolation(self.rule_type, self.field_name, "field is missing from record")

        if value is None:
            raise ValidationViolation(self.rule_type, self.field_name, "value is null")

        if not self.allow_empty_string and isinstance(value, str) and value.strip() == "":
            raise ValidationViolation(self.rule_type, self.field_name, "value is an empty string")

    @property
    def rule_type(self) -> str:
        return "required_field"
