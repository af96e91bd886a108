"""
Pytest configuration and fixtures for product cleaning tests

This module provides shared fixtures for unit, integration, and E2E tests.
"""
from decimal import Decimal
from typing import Generator

import pytest

from src.core.models import RawRecord


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that require Spark or Docker containers"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that run the full CLI"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 5 seconds to run"
    )


# =======================
# RECORD FIXTURES
# =======================

@pytest.fixture
def imputation_batch() -> list[RawRecord]:
    """Three records, the middle one missing weight and price"""
    return [
        RawRecord(product_id=1, weight="500 grams", price=Decimal("2.50")),
        RawRecord(product_id=2, weight=None, price=None),
        RawRecord(product_id=3, weight="300 grams", price=Decimal("4.00")),
    ]


@pytest.fixture
def dirty_batch() -> list[RawRecord]:
    """A batch exercising every default rule"""
    return [
        RawRecord(
            product_id=1,
            product_type="Produce",
            brand="TopBrand",
            weight="500 grams",
            price=Decimal("2.50"),
            average_units_sold=12,
            year_added=2018,
            stock_location="a",
        ),
        RawRecord(
            product_id=2,
            product_type="",
            brand="-",
            weight=None,
            price=None,
            average_units_sold=None,
            year_added=None,
            stock_location=None,
        ),
        RawRecord(
            product_id=3,
            product_type=None,
            brand=None,
            weight="300.5 kg",
            price=Decimal("4.005"),
            average_units_sold=3,
            year_added=2020,
            stock_location="b",
        ),
        RawRecord(
            product_id=4,
            product_type="Meat",
            brand="",
            weight="250",
            price=Decimal("10"),
            average_units_sold=0,
            year_added=2021,
            stock_location="Unknown",
        ),
    ]


# =======================
# SPARK FIXTURES
# =======================

@pytest.fixture(scope="session")
def spark_session():
    """
    Create a Spark session for testing with local mode

    Yields:
        SparkSession configured for local testing
    """
    pyspark_sql = pytest.importorskip("pyspark.sql")

    spark = (
        pyspark_sql.SparkSession.builder
        .appName("product-cleaning-test")
        .master("local[2]")
        .config("spark.sql.shuffle.partitions", "2")
        .config("spark.driver.memory", "1g")
        .config("spark.ui.enabled", "false")  # Disable UI for tests
        .getOrCreate()
    )

    # Set log level to WARN to reduce test output noise
    spark.sparkContext.setLogLevel("WARN")

    yield spark

    spark.stop()


# =======================
# DATABASE FIXTURES (Testcontainers)
# =======================

@pytest.fixture(scope="session")
def postgres_container() -> Generator:
    """
    Start PostgreSQL container for integration tests

    Yields:
        PostgresContainer instance
    """
    postgres_module = pytest.importorskip("testcontainers.postgres")

    with postgres_module.PostgresContainer(
        image="postgres:16.2-alpine",
        username="test_pipeline",
        password="test_password",
        dbname="test_products",
    ) as postgres:
        yield postgres


@pytest.fixture(scope="function")
def db_pool(postgres_container):
    """
    Open a connection pool against the test container with fresh tables

    Yields:
        DatabaseConnectionPool with empty products and cleaned_products tables
    """
    from src.warehouse.connection import DatabaseConnectionPool
    from src.warehouse.schema_mgmt import SchemaManager

    pool = DatabaseConnectionPool(
        host=postgres_container.get_container_host_ip(),
        port=int(postgres_container.get_exposed_port(5432)),
        database="test_products",
        user="test_pipeline",
        password="test_password",
    )
    pool.open()

    SchemaManager(pool).create_tables()
    pool.execute_command("TRUNCATE TABLE products, cleaned_products")

    yield pool

    pool.close()
