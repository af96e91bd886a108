"""
Batch cleaning module.
"""

from .pipeline import CleaningPipeline, clean_batch

__all__ = [
    "CleaningPipeline",
    "clean_batch",
]
