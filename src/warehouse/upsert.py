"""
Idempotent upsert of cleaned products.

Implements INSERT ... ON CONFLICT (product_id) DO UPDATE so re-running the
pipeline over the same batch rewrites rows instead of duplicating them.
"""

from typing import Iterable

from src.core.models import CleanRecord
from src.observability.logger import get_logger
from src.utils.validation import sanitize_sql_identifier

from .connection import DatabaseConnectionPool
from .schema_mgmt import CLEANED_PRODUCTS_TABLE

logger = get_logger(__name__)

UPSERT_SQL = """
    INSERT INTO {table} (
        product_id, product_type, brand, weight, price,
        average_units_sold, year_added, stock_location, cleaned_at
    )
    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, now())
    ON CONFLICT (product_id) DO UPDATE SET
        product_type = EXCLUDED.product_type,
        brand = EXCLUDED.brand,
        weight = EXCLUDED.weight,
        price = EXCLUDED.price,
        average_units_sold = EXCLUDED.average_units_sold,
        year_added = EXCLUDED.year_added,
        stock_location = EXCLUDED.stock_location,
        cleaned_at = EXCLUDED.cleaned_at
"""


class CleanedProductsWriter:
    """
    Writes cleaned product batches to the cleaned products table.
    """

    def __init__(self, pool: DatabaseConnectionPool, table: str = CLEANED_PRODUCTS_TABLE):
        """
        Args:
            pool: Database connection pool
            table: Target table name
        """
        self.pool = pool
        self.table = sanitize_sql_identifier(table, "table")

    @staticmethod
    def _to_params(record: CleanRecord) -> tuple:
        return (
            record.product_id,
            record.product_type,
            record.brand,
            record.weight,
            record.price,
            record.average_units_sold,
            record.year_added,
            record.stock_location,
        )

    def upsert_record(self, record: CleanRecord) -> None:
        """Upsert a single cleaned record."""
        self.pool.execute_command(UPSERT_SQL.format(table=self.table), self._to_params(record))

    def upsert_batch(self, records: Iterable[CleanRecord]) -> int:
        """
        Upsert a cleaned batch in one transaction.

        Args:
            records: Cleaned records

        Returns:
            Number of records written
        """
        params = [self._to_params(record) for record in records]
        count = self.pool.execute_batch(UPSERT_SQL.format(table=self.table), params)
        logger.info(f"Upserted {count} records into {self.table}")
        return count
