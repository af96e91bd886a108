"""
Per-field cleaning rules and batch median imputation.
"""

from .errors import CleaningError, ImputationImpossible, ParseError
from .field_normalizer import FieldNormalizer
from .median_imputer import UNPARSEABLE, MedianImputer, interpolated_median, round_half_away
from .missing import MissingMarker, is_missing
from .weight_extractor import WeightExtractor

__all__ = [
    "CleaningError",
    "ParseError",
    "ImputationImpossible",
    "FieldNormalizer",
    "WeightExtractor",
    "MedianImputer",
    "UNPARSEABLE",
    "interpolated_median",
    "round_half_away",
    "MissingMarker",
    "is_missing",
]
