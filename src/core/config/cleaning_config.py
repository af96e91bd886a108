"""
Cleaning configuration management.

Loads the overridable cleaning defaults and the validation checks from
YAML files and provides the built-in configuration used when no file is
given.
"""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from src.core.models import PRODUCT_FIELDS

IMPUTABLE_FIELDS = ("weight", "price")


class CheckRule(BaseModel):
    """
    A single validation rule belonging to a named check.

    Attributes:
        rule_name: Unique rule name
        rule_type: Validator type (required_field, range or unique)
        field_name: Field the rule applies to
        parameters: Rule-specific parameters (e.g., min_exclusive for range)
        enabled: Whether the rule is active
    """

    rule_name: str = Field(..., min_length=1)
    rule_type: Literal["required_field", "range", "unique"]
    field_name: str
    parameters: dict[str, Any] = Field(default_factory=dict)
    enabled: bool = True


def default_checks() -> dict[str, list[CheckRule]]:
    """The output contract: no nulls, unique product ids, positive weight and price."""
    not_null = [
        CheckRule(
            rule_name=f"{field_name}_required",
            rule_type="required_field",
            field_name=field_name,
            parameters={"allow_empty_string": True},
        )
        for field_name in PRODUCT_FIELDS
    ]
    return {
        "not_null": not_null,
        "unique_product_id": [
            CheckRule(
                rule_name="product_id_unique",
                rule_type="unique",
                field_name="product_id",
            )
        ],
        "weight_positive": [
            CheckRule(
                rule_name="weight_range",
                rule_type="range",
                field_name="weight",
                parameters={"min_exclusive": 0},
            )
        ],
        "price_positive": [
            CheckRule(
                rule_name="price_range",
                rule_type="range",
                field_name="price",
                parameters={"min_exclusive": 0},
            )
        ],
    }


class CleaningConfig(BaseModel):
    """
    Overridable cleaning defaults.

    Attributes:
        unknown_label: Substitute for missing product_type, brand and stock_location
        default_average_units_sold: Substitute for missing average_units_sold
        default_year_added: Substitute for missing year_added ("unknown vintage")
        brand_placeholders: Literal brand values treated as missing
        rounding_places: Decimal places kept for weight and price
        imputed_fields: Numeric fields filled with the batch median
        checks: Check name -> rules a record must pass
    """

    unknown_label: str = Field("Unknown", min_length=1)
    default_average_units_sold: int = 0
    default_year_added: int = 2022
    brand_placeholders: list[str] = Field(default_factory=lambda: ["-"])
    rounding_places: int = Field(2, ge=0, le=10)
    imputed_fields: list[str] = Field(default_factory=lambda: list(IMPUTABLE_FIELDS))
    checks: dict[str, list[CheckRule]] = Field(default_factory=default_checks)

    @field_validator("imputed_fields")
    @classmethod
    def check_imputable(cls, v):
        """Only numeric fields can be median-imputed."""
        unknown = [name for name in v if name not in IMPUTABLE_FIELDS]
        if unknown:
            raise ValueError(f"Fields cannot be imputed: {unknown}. Allowed: {list(IMPUTABLE_FIELDS)}")
        return v


class CleaningConfigLoader:
    """
    Loads a CleaningConfig from a YAML configuration file.

    Expected YAML format:
    ```yaml
    defaults:
      unknown_label: Unknown
      default_average_units_sold: 0
      default_year_added: 2022
      brand_placeholders: ["-"]
      rounding_places: 2

    checks:
      not_null:
        - type: required_field
          fields: [product_id, product_type, brand, weight, price]
          params:
            allow_empty_string: true
      price_positive:
        - type: range
          field: price
          params:
            min_exclusive: 0
    ```

    Sections are optional; anything omitted keeps its built-in default.
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Cleaning configuration file not found: {config_path}")

    def load(self) -> CleaningConfig:
        """
        Load and parse the cleaning configuration.

        Returns:
            CleaningConfig built from the file

        Raises:
            ValueError: If YAML is invalid or a check definition is malformed
        """
        with open(self.config_path) as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise ValueError("Configuration file must contain a mapping")

        settings: dict[str, Any] = dict(config.get("defaults") or {})

        if "checks" in config:
            checks = config["checks"] or {}
            if not isinstance(checks, dict):
                raise ValueError("'checks' section must map check names to rule lists")
            settings["checks"] = {
                check_name: self._parse_check(check_name, rule_defs)
                for check_name, rule_defs in checks.items()
            }

        return CleaningConfig(**settings)

    def _parse_check(self, check_name: str, rule_defs: Any) -> list[CheckRule]:
        """
        Parse the rule list of one check.

        Args:
            check_name: Name of the check the rules belong to
            rule_defs: The rule definitions from YAML

        Returns:
            Parsed rules

        Raises:
            ValueError: If a rule definition is invalid
        """
        if not isinstance(rule_defs, list):
            raise ValueError(f"Rules for check '{check_name}' must be a list")

        rules = []
        for idx, rule_def in enumerate(rule_defs):
            rules.extend(self._parse_rule(check_name, rule_def, idx))
        return rules

    def _parse_rule(self, check_name: str, rule_def: dict[str, Any], idx: int) -> list[CheckRule]:
        """
        Parse a single rule definition, expanding a 'fields' list into one rule per field.

        Args:
            check_name: The check this rule belongs to
            rule_def: The rule definition from YAML
            idx: Index of this rule within the check (for naming)

        Returns:
            Parsed rules

        Raises:
            ValueError: If rule definition is invalid
        """
        if "type" not in rule_def:
            raise ValueError(f"Rule {idx} of check '{check_name}' is missing 'type'")

        rule_type = rule_def["type"]

        if "fields" in rule_def:
            field_names = list(rule_def["fields"])
        elif "field" in rule_def:
            field_names = [rule_def["field"]]
        else:
            raise ValueError(f"Rule {idx} of check '{check_name}' needs 'field' or 'fields'")

        unknown = [name for name in field_names if name not in PRODUCT_FIELDS]
        if unknown:
            raise ValueError(f"Check '{check_name}' references unknown fields: {unknown}")

        # Extract parameters
        parameters = rule_def.get("params", rule_def.get("parameters", {}))
        enabled = rule_def.get("enabled", True)

        return [
            CheckRule(
                rule_name=rule_def.get("name", f"{check_name}_{field_name}_{idx}"),
                rule_type=rule_type,
                field_name=field_name,
                parameters=parameters,
                enabled=enabled,
            )
            for field_name in field_names
        ]


def load_config(config_path: str | Path | None = None) -> CleaningConfig:
    """
    Load configuration from a file, or return the built-in defaults.

    Args:
        config_path: Optional path to a YAML file

    Returns:
        CleaningConfig instance
    """
    if config_path is None:
        return CleaningConfig()
    return CleaningConfigLoader(config_path).load()
