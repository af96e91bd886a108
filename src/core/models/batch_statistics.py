"""
BatchStatistics model holding the per-run medians used for imputation (ephemeral).
"""

from decimal import Decimal

from pydantic import BaseModel, Field


class BatchStatistics(BaseModel):
    """
    Medians of the imputed numeric fields for one batch run.

    Computed once per run over originally-present values only, consumed by
    the substitution step and then carried on the validation report.

    Attributes:
        medians: Interpolated median per field (None when no value was present)
        sample_sizes: Number of present values each median was computed from
    """

    medians: dict[str, Decimal | None] = Field(default_factory=dict)
    sample_sizes: dict[str, int] = Field(default_factory=dict)

    @property
    def median_weight(self) -> Decimal | None:
        return self.medians.get("weight")

    @property
    def median_price(self) -> Decimal | None:
        return self.medians.get("price")

    class Config:
        frozen = True
