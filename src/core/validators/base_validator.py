"""
Field-level rule interface used by the record validator.

A rule inspects one field of a cleaned record and raises ValidationViolation
when the record breaks the output contract.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping


class ValidationViolation(Exception):
    """A cleaned record breaks one output rule. Diagnostic, never fatal."""

    def __init__(self, rule_type: str, field_name: str, message: str, product_id: int | None = None):
        self.rule_type = rule_type
        self.field_name = field_name
        self.message = message
        self.product_id = product_id
        super().__init__(f"[{rule_type}] {field_name}: {message}")


class BaseValidator(ABC):
    """
    Abstract base class for field rules.

    Subclasses implement validate() for one rule type and expose the
    type name through rule_type.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        """
        Args:
            field_name: Field of the cleaned record this rule reads
            parameters: Rule-specific parameters from the check configuration
        """
        self.field_name = field_name
        self.parameters = parameters or {}

    @abstractmethod
    def validate(self, value: Any, record: Mapping[str, Any]) -> None:
        """
        Check one field value.

        Args:
            value: The field value
            record: The whole cleaned record as a mapping

        Raises:
            ValidationViolation: If the value breaks the rule
        """

    def start_batch(self) -> None:
        """Forget per-batch state before a new batch is checked."""

    @property
    @abstractmethod
    def rule_type(self) -> str:
        """Rule type identifier used in configuration."""

    def find_violation(self, record: Mapping[str, Any]) -> ValidationViolation | None:
        """Run the rule on a record and return the violation instead of raising it."""
        try:
            self.validate(record.get(self.field_name), record)
        except ValidationViolation as violation:
            violation.product_id = record.get("product_id")
            return violation
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(field={self.field_name}, params={self.parameters})"
