"""
Command-line interface for cleaning a product batch.

Usage:
    python -m src.cli.clean_cli clean --input <file_path> [options]
    python -m src.cli.clean_cli clean --from-table [options]

Exit status: 0 when the cleaned batch passes every check, 1 when a check
fails, 2 when the batch cannot be cleaned (a numeric field missing in
every record, unreadable input).
"""

import argparse
import sys
from pathlib import Path

from psycopg import OperationalError

from src.batch.pipeline import CleaningPipeline
from src.batch.readers.table_reader import ProductTableReader
from src.core.cleaning import ImputationImpossible
from src.core.config import load_config
from src.core.models import CleaningResult, RawRecord
from src.observability.logger import get_logger, reconfigure_loggers
from src.utils.validation import InputValidationError, validate_file_path
from src.warehouse.connection import DatabaseConnectionPool
from src.warehouse.schema_mgmt import SchemaManager
from src.warehouse.upsert import CleanedProductsWriter

logger = get_logger(__name__)

EXIT_ACCEPTED = 0
EXIT_REJECTED = 1
EXIT_FAILED = 2


def create_spark_session(app_name: str = "ProductCleaning"):
    """
    Create a local Spark session for reading product files.

    Args:
        app_name: Application name

    Returns:
        SparkSession
    """
    # Spark is only needed for file input
    from pyspark.sql import SparkSession

    spark = SparkSession.builder \
        .appName(app_name) \
        .master("local[*]") \
        .config("spark.ui.enabled", "false") \
        .getOrCreate()
    spark.sparkContext.setLogLevel("WARN")

    return spark


def create_pool(args) -> DatabaseConnectionPool:
    """Build a database pool from command-line arguments (env vars fill the gaps)."""
    return DatabaseConnectionPool(
        host=args.db_host,
        port=args.db_port,
        database=args.db_name,
        user=args.db_user,
        password=args.db_password,
    )


def read_file_batch(args) -> list[RawRecord]:
    """Read the input file with Spark and materialize it as raw records."""
    from src.batch.readers.file_reader import FileReader

    input_path = validate_file_path(args.input, "input")
    if not Path(input_path).exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    spark = create_spark_session()
    try:
        return FileReader(spark).read_records(input_path, file_format=args.format)
    finally:
        spark.stop()


def read_table_batch(pool) -> list[RawRecord]:
    """Read the raw products table."""
    return ProductTableReader(pool).read_records()


def write_batch(pool, result: CleaningResult) -> int:
    """Create the output table if needed and upsert the cleaned batch."""
    SchemaManager(pool).create_tables()
    return CleanedProductsWriter(pool).upsert_batch(result.records)


def log_report(result: CleaningResult) -> None:
    """Log the validation report, one line per check."""
    report = result.report

    logger.info("=" * 60)
    logger.info("CLEANING COMPLETE")
    logger.info("=" * 60)
    logger.info(f"Records cleaned: {report.total_records}")
    for field_name, count in report.defaults_applied.items():
        logger.info(f"Defaults applied to {field_name}: {count}")
    for field_name, count in report.values_imputed.items():
        median = report.statistics.medians.get(field_name) if report.statistics else None
        logger.info(f"Imputed {field_name}: {count} (median {median})")
    for issue in report.issues:
        logger.warning(f"Product {issue.product_id}: {issue.message}")
    for check, count in report.checks.items():
        logger.info(f"Check {check}: {count} violations")
    logger.info(f"Result: {'ACCEPTED' if report.passed else 'REJECTED'}")
    logger.info("=" * 60)


def clean_command(args) -> int:
    """
    Execute the clean command.

    Args:
        args: Command-line arguments

    Returns:
        Process exit status
    """
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Invalid cleaning configuration: {e}")
        return EXIT_FAILED

    pool = None
    try:
        if args.from_table or args.write:
            pool = create_pool(args)
            pool.open()

        if args.from_table:
            records = read_table_batch(pool)
        else:
            records = read_file_batch(args)

        result = CleaningPipeline(config).run(records)
        log_report(result)

        if args.report_file:
            Path(args.report_file).write_text(result.report.model_dump_json(indent=2))
            logger.info(f"Validation report written to {args.report_file}")

        if args.write:
            written = write_batch(pool, result)
            logger.info(f"Wrote {written} cleaned records")

        return EXIT_ACCEPTED if result.accepted else EXIT_REJECTED

    except ImputationImpossible as e:
        logger.error(f"Batch cannot be cleaned: {e}", extra={"field_name": e.field_name})
        return EXIT_FAILED
    except (FileNotFoundError, InputValidationError) as e:
        logger.error(str(e))
        return EXIT_FAILED
    except (OperationalError, ValueError) as e:
        logger.error(f"Batch could not be loaded: {e}")
        return EXIT_FAILED
    finally:
        if pool is not None:
            pool.close()


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Product batch cleaning pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Clean a CSV file and report
  python -m src.cli.clean_cli clean --input data/products.csv

  # Clean with custom defaults and write the report as JSON
  python -m src.cli.clean_cli clean --input data/products.csv \\
      --config config/cleaning.yaml --report-file report.json

  # Clean the products table and store the result in cleaned_products
  python -m src.cli.clean_cli clean --from-table --write --db-password secret
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    clean_parser = subparsers.add_parser("clean", help="Clean and validate a product batch")
    source = clean_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", help="Path to input file")
    source.add_argument(
        "--from-table",
        action="store_true",
        help="Read the raw products table instead of a file"
    )
    clean_parser.add_argument(
        "--format",
        default="csv",
        choices=["csv", "json", "parquet"],
        help="Input file format (default: csv)"
    )
    clean_parser.add_argument(
        "--config",
        default=None,
        help="Path to cleaning configuration YAML (built-in defaults if omitted)"
    )
    clean_parser.add_argument(
        "--report-file",
        default=None,
        help="Write the validation report to this JSON file"
    )
    clean_parser.add_argument(
        "--write",
        action="store_true",
        help="Upsert the cleaned batch into the cleaned_products table"
    )
    clean_parser.add_argument("--log-level", default=None, help="Log level (default: env LOG_LEVEL or INFO)")
    clean_parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "text"],
        help="Log format (default: env LOG_FORMAT or json)"
    )

    # Database connection arguments (fall back to DB_* env vars)
    clean_parser.add_argument("--db-host", default=None, help="Database host")
    clean_parser.add_argument("--db-port", type=int, default=None, help="Database port")
    clean_parser.add_argument("--db-name", default=None, help="Database name")
    clean_parser.add_argument("--db-user", default=None, help="Database user")
    clean_parser.add_argument("--db-password", default=None, help="Database password")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_FAILED

    if args.log_level or args.log_format:
        reconfigure_loggers(level=args.log_level, format_type=args.log_format)

    if args.command == "clean":
        return clean_command(args)

    return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
