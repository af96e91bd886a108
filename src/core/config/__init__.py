"""
Cleaning configuration: overridable defaults and validation checks.
"""

from .cleaning_config import (
    CheckRule,
    CleaningConfig,
    CleaningConfigLoader,
    default_checks,
    load_config,
)

__all__ = [
    "CheckRule",
    "CleaningConfig",
    "CleaningConfigLoader",
    "default_checks",
    "load_config",
]
