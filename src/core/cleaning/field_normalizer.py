"""
FieldNormalizer - per-record defaults for categorical and textual fields.
"""

from typing import Any

from src.core.config import CleaningConfig
from src.core.models import RawRecord
from src.observability.logger import get_logger

from .missing import EMPTY_ONLY, is_missing, marker_set

logger = get_logger(__name__)


class FieldNormalizer:
    """
    Resolves field defaults independently per record.

    Rules:
    - product_type: missing or empty -> unknown label
    - brand: missing, empty or a placeholder ("-") -> unknown label
    - average_units_sold: missing -> configured default (0)
    - year_added: missing -> configured default (2022)
    - stock_location: missing -> unknown label, otherwise uppercased

    Every rule is total: each value is either kept, coerced or defaulted,
    nothing raises.
    """

    NORMALIZED_FIELDS = (
        "product_type",
        "brand",
        "average_units_sold",
        "year_added",
        "stock_location",
    )

    def __init__(self, config: CleaningConfig | None = None):
        """
        Initialize normalizer.

        Args:
            config: Cleaning defaults (built-in defaults if None)
        """
        self.config = config or CleaningConfig()
        self.unknown_label = self.config.unknown_label
        self.brand_markers = marker_set(self.config.brand_placeholders)

    def normalize_product_type(self, value: str | None) -> str:
        return self.unknown_label if is_missing(value, EMPTY_ONLY) else value

    def normalize_brand(self, value: str | None) -> str:
        return self.unknown_label if is_missing(value, self.brand_markers) else value

    def normalize_average_units_sold(self, value: int | None) -> int:
        return self.config.default_average_units_sold if value is None else value

    def normalize_year_added(self, value: int | None) -> int:
        return self.config.default_year_added if value is None else value

    def normalize_stock_location(self, value: str | None) -> str:
        # The unknown label is kept verbatim so re-cleaning leaves it alone
        if value is None or value == self.unknown_label:
            return self.unknown_label
        return value.upper()

    def is_defaulted(self, field_name: str, value: Any) -> bool:
        """Whether a raw value will be resolved through its default rule."""
        if field_name == "product_type":
            return is_missing(value, EMPTY_ONLY)
        if field_name == "brand":
            return is_missing(value, self.brand_markers)
        return value is None

    def normalize(self, record: RawRecord) -> tuple[dict[str, Any], list[str]]:
        """
        Normalize the categorical fields of one record.

        Args:
            record: Raw record to normalize

        Returns:
            Tuple of (normalized field values, names of fields that were defaulted)
        """
        normalized = {
            "product_type": self.normalize_product_type(record.product_type),
            "brand": self.normalize_brand(record.brand),
            "average_units_sold": self.normalize_average_units_sold(record.average_units_sold),
            "year_added": self.normalize_year_added(record.year_added),
            "stock_location": self.normalize_stock_location(record.stock_location),
        }

        defaulted = [
            field_name
            for field_name in self.NORMALIZED_FIELDS
            if self.is_defaulted(field_name, getattr(record, field_name))
        ]
        if defaulted:
            logger.debug(
                f"Defaults applied to product {record.product_id}",
                extra={"product_id": record.product_id, "fields": defaulted},
            )

        return normalized, defaulted
