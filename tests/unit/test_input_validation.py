"""
Unit tests for input validation utilities.
"""

import pytest

from src.utils.validation import (
    InputValidationError,
    sanitize_sql_identifier,
    validate_file_path,
)


class TestSanitizeSqlIdentifier:
    """Test table name checks."""

    def test_valid_identifiers(self):
        assert sanitize_sql_identifier("products") == "products"
        assert sanitize_sql_identifier("cleaned_products") == "cleaned_products"
        assert sanitize_sql_identifier("_staging2") == "_staging2"
        assert sanitize_sql_identifier("  products  ") == "products"

    def test_invalid_characters(self):
        with pytest.raises(InputValidationError, match="invalid characters"):
            sanitize_sql_identifier("products; DROP TABLE products;")

        with pytest.raises(InputValidationError, match="invalid characters"):
            sanitize_sql_identifier("2products")

    def test_empty(self):
        with pytest.raises(InputValidationError, match="must be a non-empty string"):
            sanitize_sql_identifier("")

    def test_too_long(self):
        with pytest.raises(InputValidationError, match="maximum length"):
            sanitize_sql_identifier("p" * 64)

    def test_reserved_keyword(self):
        with pytest.raises(InputValidationError, match="reserved SQL keyword"):
            sanitize_sql_identifier("TABLE", "table")

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            sanitize_sql_identifier("bad name")


class TestValidateFilePath:
    """Test input path checks."""

    def test_valid_paths(self):
        assert validate_file_path("/data/products.csv") == "/data/products.csv"
        assert validate_file_path(" data/products.csv ") == "data/products.csv"

    def test_whitespace_only(self):
        with pytest.raises(InputValidationError, match="cannot be empty"):
            validate_file_path("   ")

    def test_path_traversal(self):
        with pytest.raises(InputValidationError, match="path traversal"):
            validate_file_path("../../etc/passwd")

    def test_null_byte(self):
        with pytest.raises(InputValidationError, match="null bytes"):
            validate_file_path("products.csv\x00.txt")
