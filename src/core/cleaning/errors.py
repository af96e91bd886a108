"""
Error taxonomy for the cleaning pipeline.

ParseError is recoverable and collected per record; ImputationImpossible is
fatal for the batch run.
"""

from typing import Any


class CleaningError(Exception):
    """Base class for cleaning pipeline errors."""


class ParseError(CleaningError):
    """Raised when a present free-text field has a non-numeric leading token."""

    def __init__(self, field_name: str, raw_value: Any, token: str, product_id: int | None = None):
        self.field_name = field_name
        self.raw_value = raw_value
        self.token = token
        self.product_id = product_id
        super().__init__(f"{field_name}: leading token {token!r} is not a number")


class ImputationImpossible(CleaningError):
    """Raised when records need a median substitute but no record has a value."""

    def __init__(self, field_name: str, missing_count: int):
        self.field_name = field_name
        self.missing_count = missing_count
        super().__init__(
            f"Cannot impute '{field_name}': every record in the batch is missing it "
            f"({missing_count} records need a value)"
        )
