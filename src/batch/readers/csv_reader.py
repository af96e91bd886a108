"""
CSV reader for raw product files using Spark.
"""

from pyspark.sql import DataFrame, SparkSession
from pyspark.sql.types import IntegerType, StringType, StructField, StructType

# Price is read as text and parsed into Decimal by RawRecord, so no digits
# are lost to a binary float on the way in
PRODUCT_SCHEMA = StructType([
    StructField("product_id", IntegerType(), nullable=False),
    StructField("product_type", StringType(), nullable=True),
    StructField("brand", StringType(), nullable=True),
    StructField("weight", StringType(), nullable=True),
    StructField("price", StringType(), nullable=True),
    StructField("average_units_sold", IntegerType(), nullable=True),
    StructField("year_added", IntegerType(), nullable=True),
    StructField("stock_location", StringType(), nullable=True),
])


class CSVReader:
    """
    Reads product CSV files with the explicit product schema.
    """

    def __init__(self, spark: SparkSession):
        """
        Args:
            spark: Active Spark session
        """
        self.spark = spark

    def read(
        self,
        file_path: str,
        schema: StructType | None = None,
        header: bool = True,
        delimiter: str = ",",
    ) -> DataFrame:
        """
        Read a CSV file into a Spark DataFrame.

        Empty cells are read as null.

        Args:
            file_path: Path to CSV file
            schema: Explicit schema (the product schema if None)
            header: Whether CSV has header row
            delimiter: Field delimiter

        Returns:
            Spark DataFrame
        """
        return self.spark.read \
            .schema(schema or PRODUCT_SCHEMA) \
            .option("header", str(header).lower()) \
            .option("delimiter", delimiter) \
            .option("mode", "PERMISSIVE") \
            .csv(file_path)
