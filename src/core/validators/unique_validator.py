"""
UniqueValidator - a field value may appear only once per batch.
"""

from typing import Any, Mapping

from .base_validator import BaseValidator, ValidationViolation


class UniqueValidator(BaseValidator):
    """
    Fails for every record whose value was already seen in the current batch.

    The first occurrence passes, each later one is a violation. Nulls are
    skipped. Seen values are kept until start_batch() is called.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)
        self._seen: set[Any] = set()

    def start_batch(self) -> None:
        self._seen.clear()

    def validate(self, value: Any, record: Mapping[str, Any]) -> None:
        if value is None:
            return

        if value in self._seen:
            raise ValidationViolation(self.rule_type, self.field_name, f"duplicate value {value!r}")

        self._seen.add(value)

    @property
    def rule_type(self) -> str:
        return "unique"
