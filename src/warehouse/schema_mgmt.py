"""
Table management for raw and cleaned product data.

Creates the products table (raw input) and the cleaned_products table
(pipeline output), and runs the post-load null check on the latter.
"""

from src.utils.validation import sanitize_sql_identifier

from .connection import DatabaseConnectionPool

PRODUCTS_TABLE = "products"
CLEANED_PRODUCTS_TABLE = "cleaned_products"

PRODUCTS_DDL = """
    CREATE TABLE IF NOT EXISTS {table} (
        product_id           INTEGER PRIMARY KEY,
        product_type         TEXT,
        brand                TEXT,
        weight               TEXT,
        price                NUMERIC,
        average_units_sold   INTEGER,
        year_added           INTEGER,
        stock_location       TEXT
    )
"""

CLEANED_PRODUCTS_DDL = """
    CREATE TABLE IF NOT EXISTS {table} (
        product_id           INTEGER PRIMARY KEY,
        product_type         TEXT NOT NULL,
        brand                TEXT NOT NULL,
        weight               NUMERIC,
        price                NUMERIC,
        average_units_sold   INTEGER NOT NULL,
        year_added           INTEGER NOT NULL,
        stock_location       TEXT NOT NULL,
        cleaned_at           TIMESTAMPTZ NOT NULL DEFAULT now()
    )
"""


class SchemaManager:
    """
    Creates the product tables and inspects persisted cleaned data.
    """

    def __init__(
        self,
        pool: DatabaseConnectionPool,
        products_table: str = PRODUCTS_TABLE,
        cleaned_table: str = CLEANED_PRODUCTS_TABLE,
    ):
        """
        Args:
            pool: Database connection pool
            products_table: Raw products table name
            cleaned_table: Cleaned products table name
        """
        self.pool = pool
        self.products_table = sanitize_sql_identifier(products_table, "products_table")
        self.cleaned_table = sanitize_sql_identifier(cleaned_table, "cleaned_table")

    def create_tables(self) -> None:
        """Create both product tables if they do not exist."""
        self.pool.execute_command(PRODUCTS_DDL.format(table=self.products_table))
        self.pool.execute_command(CLEANED_PRODUCTS_DDL.format(table=self.cleaned_table))

    def count_null_rows(self) -> int:
        """
        Count persisted cleaned rows that still hold a null in a checked column.

        Weight and price are nullable in the table so a rejected batch can
        still be stored and inspected; this query finds such rows.

        Returns:
            Number of offending rows
        """
        result = self.pool.execute_query(
            f"""
            SELECT COUNT(*) AS null_rows
            FROM {self.cleaned_table}
            WHERE product_type IS NULL
               OR brand IS NULL
               OR weight IS NULL
               OR price IS NULL
               OR stock_location IS NULL
            """
        )
        return result[0]["null_rows"]
