"""
Reader for the raw products table in PostgreSQL.
"""

from src.core.models import RawRecord
from src.observability.logger import get_logger
from src.utils.validation import sanitize_sql_identifier
from src.warehouse.connection import DatabaseConnectionPool
from src.warehouse.schema_mgmt import PRODUCTS_TABLE

logger = get_logger(__name__)


class ProductTableReader:
    """
    Loads the whole products table as one batch of RawRecords.
    """

    def __init__(self, pool: DatabaseConnectionPool, table: str = PRODUCTS_TABLE):
        """
        Args:
            pool: Open database connection pool
            table: Source table name
        """
        self.pool = pool
        self.table = sanitize_sql_identifier(table, "table")

    def read_records(self) -> list[RawRecord]:
        """
        Read every product row, ordered by product_id.

        Returns:
            Raw records
        """
        rows = self.pool.execute_query(
            f"""
            SELECT product_id, product_type, brand, weight, price,
                   average_units_sold, year_added, stock_location
            FROM {self.table}
            ORDER BY product_id
            """
        )
        records = [RawRecord.model_validate(row) for row in rows]
        logger.info(f"Read {len(records)} product records from table {self.table}")
        return records
