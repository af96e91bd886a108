"""
End-to-end tests for the clean command.

Runs the CLI entry point against real files (Spark) and a real database
(testcontainers).
"""

import json
from decimal import Decimal
from pathlib import Path

import pytest

from src.cli.clean_cli import EXIT_ACCEPTED, EXIT_FAILED, EXIT_REJECTED, main

DIRTY_CSV = Path(__file__).parent.parent / "fixtures" / "dirty_products.csv"

HEADER = "product_id,product_type,brand,weight,price,average_units_sold,year_added,stock_location\n"


@pytest.fixture(autouse=True)
def require_spark():
    pytest.importorskip("pyspark")


@pytest.mark.e2e
@pytest.mark.slow
def test_dirty_csv_accepted(tmp_path):
    """
    Clean the dirty fixture file and inspect the written report.

    Steps:
    1. Run the clean command on dirty_products.csv
    2. Verify the batch is accepted
    3. Verify the report counts defaults and imputations
    """
    assert DIRTY_CSV.exists(), f"Test CSV not found: {DIRTY_CSV}"
    report_path = tmp_path / "report.json"

    code = main(["clean", "--input", str(DIRTY_CSV), "--report-file", str(report_path), "--log-format", "text"])

    assert code == EXIT_ACCEPTED
    report = json.loads(report_path.read_text())
    assert report["total_records"] == 6
    assert report["passed"] is True
    assert report["values_imputed"] == {"weight": 2, "price": 2}
    assert report["defaults_applied"]["brand"] == 3
    assert report["defaults_applied"]["year_added"] == 2
    assert report["defaults_applied"]["stock_location"] == 2
    assert Decimal(report["statistics"]["medians"]["weight"]) == Decimal("275.25")
    assert report["issues"] == []


@pytest.mark.e2e
@pytest.mark.slow
def test_non_positive_price_rejected(tmp_path):
    path = tmp_path / "products.csv"
    path.write_text(HEADER + "1,Produce,Acme,1 kg,0,1,2020,a\n2,Produce,Acme,2 kg,3,1,2020,a\n")

    assert main(["clean", "--input", str(path)]) == EXIT_REJECTED


@pytest.mark.e2e
@pytest.mark.slow
def test_unparseable_weight_reported(tmp_path):
    path = tmp_path / "products.csv"
    path.write_text(HEADER + "1,Produce,Acme,heavy,1,1,2020,a\n2,Produce,Acme,2 kg,3,1,2020,a\n")
    report_path = tmp_path / "report.json"

    code = main(["clean", "--input", str(path), "--report-file", str(report_path)])

    assert code == EXIT_REJECTED
    report = json.loads(report_path.read_text())
    assert report["checks"]["not_null"] == 1
    assert report["issues"][0]["product_id"] == 1
    assert report["issues"][0]["raw_value"] == "heavy"


@pytest.mark.e2e
@pytest.mark.slow
def test_price_missing_everywhere(tmp_path):
    path = tmp_path / "products.csv"
    path.write_text(HEADER + "1,Produce,Acme,1 kg,,1,2020,a\n2,Produce,Acme,2 kg,,1,2020,a\n")
    report_path = tmp_path / "report.json"

    assert main(["clean", "--input", str(path), "--report-file", str(report_path)]) == EXIT_FAILED
    assert not report_path.exists()


@pytest.mark.e2e
@pytest.mark.integration
@pytest.mark.slow
def test_table_to_table(db_pool, postgres_container):
    """Clean the products table into cleaned_products through the CLI"""
    db_pool.execute_batch(
        """
        INSERT INTO products (
            product_id, product_type, brand, weight, price,
            average_units_sold, year_added, stock_location
        )
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
        """,
        [
            (1, "Produce", "TopBrand", "500 grams", Decimal("2.50"), 12, 2018, "a"),
            (2, None, "-", None, None, None, None, None),
            (3, "Meat", "Acme", "300 grams", Decimal("4.00"), 5, 2020, "b"),
        ],
    )

    code = main(
        [
            "clean",
            "--from-table",
            "--write",
            "--db-host", postgres_container.get_container_host_ip(),
            "--db-port", str(postgres_container.get_exposed_port(5432)),
            "--db-name", "test_products",
            "--db-user", "test_pipeline",
            "--db-password", "test_password",
        ]
    )

    assert code == EXIT_ACCEPTED
    rows = db_pool.execute_query("SELECT * FROM cleaned_products ORDER BY product_id")
    assert len(rows) == 3
    assert rows[1]["weight"] == Decimal("400.00")
    assert rows[1]["brand"] == "Unknown"
    assert rows[2]["stock_location"] == "B"
