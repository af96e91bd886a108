"""
Generic product file reader for multiple formats (CSV, JSON, Parquet).
"""

from pyspark.sql import DataFrame, SparkSession
from pyspark.sql.functions import col
from pyspark.sql.types import StructType

from src.core.models import PRODUCT_FIELDS, RawRecord
from src.observability.logger import get_logger

from .csv_reader import PRODUCT_SCHEMA, CSVReader

logger = get_logger(__name__)

SUPPORTED_FORMATS = ("csv", "json", "parquet")


class FileReader:
    """
    Loads a product file and materializes it as a batch of RawRecords.
    """

    def __init__(self, spark: SparkSession):
        """
        Args:
            spark: Active Spark session
        """
        self.spark = spark
        self.csv_reader = CSVReader(spark)

    def read(
        self,
        file_path: str,
        file_format: str = "csv",
        schema: StructType | None = None,
        **options
    ) -> DataFrame:
        """
        Read file into Spark DataFrame.

        Args:
            file_path: Path to file
            file_format: Format (csv, json, parquet)
            schema: Optional explicit schema (the product schema for csv/json)
            **options: Format-specific options

        Returns:
            Spark DataFrame

        Raises:
            ValueError: If file format is unsupported
        """
        file_format = file_format.lower()

        if file_format == "csv":
            return self.csv_reader.read(file_path, schema=schema, **options)
        elif file_format == "json":
            return self.spark.read.schema(schema or PRODUCT_SCHEMA).json(file_path)
        elif file_format == "parquet":
            return self.spark.read.parquet(file_path)
        else:
            raise ValueError(f"Unsupported file format: {file_format}")

    def read_records(self, file_path: str, file_format: str = "csv", **options) -> list[RawRecord]:
        """
        Read a product file into a fully materialized batch.

        Args:
            file_path: Path to file
            file_format: Format (csv, json, parquet)
            **options: Format-specific options

        Returns:
            Raw records ordered by product_id

        Raises:
            ValueError: If a product column is missing from the file
        """
        df = self.read(file_path, file_format=file_format, **options)

        missing = [name for name in PRODUCT_FIELDS if name not in df.columns]
        if missing:
            raise ValueError(f"Input file is missing product columns: {missing}")

        rows = df.select(*PRODUCT_FIELDS).orderBy(col("product_id")).collect()
        records = [RawRecord.model_validate(row.asDict()) for row in rows]

        logger.info(f"Read {len(records)} product records from {file_path}")
        return records
