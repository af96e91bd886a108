"""
MedianImputer - fills missing numeric fields with the batch median.

Two phases:
1. compute_statistics(): medians over originally-present values, for every
   imputed field, before anything is substituted
2. impute(): substitute the medians and round every value of the field
"""

from decimal import ROUND_HALF_UP, Decimal, getcontext, localcontext
from typing import Any, Iterable, Sequence

from src.core.models import BatchStatistics
from src.observability.logger import get_logger

from .errors import ImputationImpossible

logger = get_logger(__name__)

# Sentinel for a field whose value failed to parse: not present, not imputable
UNPARSEABLE = object()


def interpolated_median(values: Iterable[Decimal]) -> Decimal:
    """
    Linear-interpolation median (50th percentile, continuous).

    For n sorted values the rank is r = 0.5 * (n - 1) and the median is
    values[floor(r)] + (r - floor(r)) * (values[ceil(r)] - values[floor(r)]).
    Odd n gives the middle value, even n the mean of the two central values.

    Args:
        values: Present values, in any order

    Returns:
        The median

    Raises:
        ValueError: If values is empty
    """
    ordered = sorted(Decimal(v) for v in values)
    n = len(ordered)
    if n == 0:
        raise ValueError("median of an empty sequence is undefined")

    # Exact result: room for a carry above the largest digit and a half below the smallest
    highest = max(value.adjusted() for value in ordered)
    lowest = min(value.as_tuple().exponent for value in ordered)
    with localcontext() as ctx:
        ctx.prec = max(getcontext().prec, highest - lowest + 3)

        rank = Decimal(n - 1) / 2
        lower = int(rank)
        upper = lower if rank == lower else lower + 1
        fraction = rank - lower

        return ordered[lower] + fraction * (ordered[upper] - ordered[lower])


def round_half_away(value: Decimal, places: int = 2) -> Decimal:
    """Round to a fixed number of places, halves away from zero (SQL ROUND on NUMERIC)."""
    value = Decimal(value)
    with localcontext() as ctx:
        ctx.prec = max(getcontext().prec, value.adjusted() + places + 2)
        return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


class MedianImputer:
    """
    Substitutes the batch median for missing numeric values.

    Rows are plain field mappings produced by the first cleaning pass. A
    field value of None means "absent, impute it"; UNPARSEABLE means the
    raw value was present but unreadable and is left as None without
    contributing to the median.
    """

    def __init__(self, fields: Sequence[str] = ("weight", "price"), rounding_places: int = 2):
        """
        Initialize imputer.

        Args:
            fields: Numeric fields to impute
            rounding_places: Decimal places kept after substitution
        """
        self.fields = tuple(fields)
        self.rounding_places = rounding_places

    @staticmethod
    def _is_present(value: Any) -> bool:
        return value is not None and value is not UNPARSEABLE

    def compute_statistics(self, rows: Sequence[dict[str, Any]]) -> BatchStatistics:
        """
        Compute the median of every imputed field over present values only.

        Args:
            rows: Partially cleaned rows (all of pass 1 must be complete)

        Returns:
            BatchStatistics with a median (or None) per field
        """
        medians: dict[str, Decimal | None] = {}
        sample_sizes: dict[str, int] = {}

        for field_name in self.fields:
            present = [row[field_name] for row in rows if self._is_present(row[field_name])]
            sample_sizes[field_name] = len(present)
            medians[field_name] = interpolated_median(present) if present else None

        return BatchStatistics(medians=medians, sample_sizes=sample_sizes)

    def check_imputable(self, rows: Sequence[dict[str, Any]], statistics: BatchStatistics) -> None:
        """
        Fail the run when a field needs substitutes but has no median.

        Raises:
            ImputationImpossible: If some row is missing a field and no row has it
        """
        for field_name in self.fields:
            if statistics.medians.get(field_name) is not None:
                continue
            missing = sum(1 for row in rows if row[field_name] is None)
            if missing:
                raise ImputationImpossible(field_name, missing)

    def impute(
        self,
        rows: Sequence[dict[str, Any]],
        statistics: BatchStatistics,
    ) -> tuple[list[dict[str, Any]], dict[str, int]]:
        """
        Substitute medians and round every imputed field.

        Args:
            rows: Partially cleaned rows
            statistics: Medians computed by compute_statistics()

        Returns:
            Tuple of (new rows, field -> number of substituted values)

        Raises:
            ImputationImpossible: If a field has missing values and no median
        """
        self.check_imputable(rows, statistics)

        imputed_counts = {field_name: 0 for field_name in self.fields}
        completed = []

        for row in rows:
            new_row = dict(row)
            for field_name in self.fields:
                value = row[field_name]
                if value is UNPARSEABLE:
                    new_row[field_name] = None
                    continue
                if value is None:
                    value = statistics.medians[field_name]
                    imputed_counts[field_name] += 1
                new_row[field_name] = round_half_away(value, self.rounding_places)
            completed.append(new_row)

        for field_name, count in imputed_counts.items():
            if count:
                logger.info(
                    f"Imputed {count} missing '{field_name}' values with median "
                    f"{statistics.medians[field_name]}",
                    extra={"field_name": field_name, "imputed": count},
                )

        return completed, imputed_counts

    def run(self, rows: Sequence[dict[str, Any]]) -> tuple[list[dict[str, Any]], dict[str, int], BatchStatistics]:
        """Compute statistics, then substitute. Convenience for both phases."""
        statistics = self.compute_statistics(rows)
        completed, imputed_counts = self.impute(rows, statistics)
        return completed, imputed_counts, statistics
