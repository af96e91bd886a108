"""
Integration tests for the PostgreSQL side of the pipeline.

Requires Docker (testcontainers).
"""

from decimal import Decimal

import pytest

from src.batch.pipeline import clean_batch
from src.batch.readers.table_reader import ProductTableReader
from src.core.models import CleanRecord
from src.warehouse.schema_mgmt import SchemaManager
from src.warehouse.upsert import CleanedProductsWriter

INSERT_PRODUCT = """
    INSERT INTO products (
        product_id, product_type, brand, weight, price,
        average_units_sold, year_added, stock_location
    )
    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
"""


def load_products(pool, rows):
    pool.execute_batch(INSERT_PRODUCT, rows)


@pytest.mark.integration
@pytest.mark.slow
class TestProductTableReader:
    """Reading the raw products table"""

    def test_reads_rows_in_id_order(self, db_pool):
        load_products(
            db_pool,
            [
                (2, None, "-", None, None, None, None, None),
                (1, "Produce", "TopBrand", "500 grams", Decimal("2.50"), 12, 2018, "a"),
            ],
        )

        records = ProductTableReader(db_pool).read_records()

        assert [record.product_id for record in records] == [1, 2]
        assert records[0].weight == "500 grams"
        assert records[0].price == Decimal("2.50")
        assert records[1].brand == "-"

    def test_rejects_unsafe_table_name(self, db_pool):
        with pytest.raises(ValueError):
            ProductTableReader(db_pool, table="products; DROP TABLE products")


@pytest.mark.integration
@pytest.mark.slow
class TestCleanedProductsWriter:
    """Upserting cleaned batches"""

    def test_upsert_is_idempotent(self, db_pool, imputation_batch):
        result = clean_batch(imputation_batch)
        writer = CleanedProductsWriter(db_pool)

        assert writer.upsert_batch(result.records) == 3
        assert writer.upsert_batch(result.records) == 3

        rows = db_pool.execute_query("SELECT * FROM cleaned_products ORDER BY product_id")
        assert len(rows) == 3
        assert rows[1]["weight"] == Decimal("400.00")
        assert rows[1]["price"] == Decimal("3.25")
        assert SchemaManager(db_pool).count_null_rows() == 0

    def test_upsert_replaces_values(self, db_pool):
        writer = CleanedProductsWriter(db_pool)
        record = CleanRecord(
            product_id=1,
            product_type="Produce",
            brand="TopBrand",
            weight=Decimal("1.00"),
            price=Decimal("1.00"),
            average_units_sold=1,
            year_added=2020,
            stock_location="A",
        )

        writer.upsert_record(record)
        writer.upsert_record(record.model_copy(update={"price": Decimal("9.99")}))

        rows = db_pool.execute_query("SELECT price FROM cleaned_products")
        assert rows == [{"price": Decimal("9.99")}]

    def test_large_values_stored_exactly(self, db_pool):
        result = clean_batch(
            [
                {"product_id": 1, "weight": "12345678901.5 grams", "price": "123456789012345678901234567.5"},
                {"product_id": 2, "weight": "1 grams", "price": "1"},
            ]
        )

        CleanedProductsWriter(db_pool).upsert_batch(result.records)

        row = db_pool.execute_query("SELECT weight, price FROM cleaned_products WHERE product_id = 1")[0]
        assert row["weight"] == Decimal("12345678901.50")
        assert row["price"] == Decimal("123456789012345678901234567.50")

    def test_null_rows_counted(self, db_pool):
        batch = clean_batch(
            [
                {"product_id": 1, "weight": "bad grams", "price": "1"},
                {"product_id": 2, "weight": "2 grams", "price": "1"},
            ]
        )

        CleanedProductsWriter(db_pool).upsert_batch(batch.records)

        assert SchemaManager(db_pool).count_null_rows() == 1


@pytest.mark.integration
@pytest.mark.slow
def test_table_round_trip(db_pool):
    """Raw table in, cleaned table out"""
    load_products(
        db_pool,
        [
            (1, "Produce", "TopBrand", "500 grams", Decimal("2.50"), 12, 2018, "a"),
            (2, "", "-", None, None, None, None, None),
            (3, "Meat", None, "300 grams", Decimal("4.00"), 5, 2020, "b"),
        ],
    )

    result = clean_batch(ProductTableReader(db_pool).read_records())
    CleanedProductsWriter(db_pool).upsert_batch(result.records)

    row = db_pool.execute_query("SELECT * FROM cleaned_products WHERE product_id = 2")[0]
    assert row["product_type"] == "Unknown"
    assert row["brand"] == "Unknown"
    assert row["weight"] == Decimal("400.00")
    assert row["price"] == Decimal("3.25")
    assert row["year_added"] == 2022
    assert row["stock_location"] == "Unknown"
