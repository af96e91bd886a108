"""
Input checks for values that reach SQL text or the filesystem.

Table names are interpolated into statements, so they are checked against
a strict identifier pattern first; input paths are checked before Spark
is started.
"""

import re

SQL_IDENTIFIER_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

POSTGRES_MAX_IDENTIFIER_LENGTH = 63

RESERVED_KEYWORDS = frozenset({
    "select", "insert", "update", "delete", "drop", "create", "alter",
    "table", "database", "index", "view", "user", "grant", "revoke",
})


class InputValidationError(ValueError):
    """Raised when a caller-supplied identifier or path is unsafe."""


def sanitize_sql_identifier(identifier: str, field_name: str = "identifier") -> str:
    """
    Check an SQL identifier (table name) before it is interpolated into a statement.

    Args:
        identifier: The identifier to check
        field_name: Name of the argument (for error messages)

    Returns:
        The identifier, stripped of surrounding whitespace

    Raises:
        InputValidationError: If the identifier is empty, malformed, too long or reserved

    Examples:
        >>> sanitize_sql_identifier("cleaned_products")
        'cleaned_products'
        >>> sanitize_sql_identifier("products; DROP TABLE products;")  # doctest: +SKIP
        InputValidationError: identifier contains invalid characters
    """
    if not identifier or not isinstance(identifier, str):
        raise InputValidationError(f"{field_name} must be a non-empty string")

    identifier = identifier.strip()

    if not SQL_IDENTIFIER_PATTERN.match(identifier):
        raise InputValidationError(
            f"{field_name} contains invalid characters. "
            "SQL identifiers must start with a letter or underscore and contain only "
            "alphanumeric characters and underscores."
        )

    if len(identifier) > POSTGRES_MAX_IDENTIFIER_LENGTH:
        raise InputValidationError(
            f"{field_name} exceeds PostgreSQL maximum length of {POSTGRES_MAX_IDENTIFIER_LENGTH} characters"
        )

    if identifier.lower() in RESERVED_KEYWORDS:
        raise InputValidationError(f"{field_name} '{identifier}' is a reserved SQL keyword")

    return identifier


def validate_file_path(file_path: str, field_name: str = "file_path") -> str:
    """
    Check an input file path.

    Args:
        file_path: The path to check
        field_name: Name of the argument (for error messages)

    Returns:
        The path, stripped of surrounding whitespace

    Raises:
        InputValidationError: If the path is empty, contains traversal or null bytes

    Examples:
        >>> validate_file_path("/data/products.csv")
        '/data/products.csv'
    """
    if not file_path or not isinstance(file_path, str):
        raise InputValidationError(f"{field_name} must be a non-empty string")

    file_path = file_path.strip()

    if not file_path:
        raise InputValidationError(f"{field_name} cannot be empty or whitespace-only")

    if ".." in file_path:
        raise InputValidationError(f"{field_name} contains path traversal characters (..)")

    if "\x00" in file_path:
        raise InputValidationError(f"{field_name} contains null bytes")

    return file_path
