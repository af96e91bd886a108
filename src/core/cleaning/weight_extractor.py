"""
WeightExtractor - parses "magnitude unit" free text into a number.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from .errors import ParseError


class WeightExtractor:
    """
    Converts a free-text weight ("500 grams") into its numeric magnitude.

    The text is split on the first space and the first token is parsed as a
    decimal number. Purely numeric text ("500") has no unit and parses the
    same way. Values that are already numeric pass through.

    Outcomes:
    - None or an empty leading token -> None (absent, eligible for imputation)
    - finite decimal leading token -> Decimal, unrounded
    - anything else -> ParseError
    """

    field_name = "weight"

    def extract(self, value: Any, product_id: int | None = None) -> Decimal | None:
        """
        Extract the numeric magnitude of a weight value.

        Args:
            value: Raw weight (text, number or None)
            product_id: Owning record, attached to a ParseError

        Returns:
            The magnitude, or None if the value is absent

        Raises:
            ParseError: If the leading token is present but not a finite number
        """
        if value is None:
            return None

        if isinstance(value, bool):
            raise ParseError(self.field_name, value, str(value), product_id)

        if isinstance(value, Decimal):
            if not value.is_finite():
                raise ParseError(self.field_name, value, str(value), product_id)
            return value

        if isinstance(value, (int, float)):
            return self._parse_token(str(value), value, product_id)

        token = str(value).split(" ", 1)[0]
        if token == "":
            return None

        return self._parse_token(token, value, product_id)

    def _parse_token(self, token: str, raw_value: Any, product_id: int | None) -> Decimal:
        try:
            number = Decimal(token)
        except InvalidOperation:
            raise ParseError(self.field_name, raw_value, token, product_id) from None

        # Decimal() also accepts "NaN" and "Infinity"
        if not number.is_finite():
            raise ParseError(self.field_name, raw_value, token, product_id)

        return number
