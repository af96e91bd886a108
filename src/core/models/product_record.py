"""
Product record models: raw rows as ingested and cleaned rows as produced.
"""

from decimal import Decimal

from pydantic import BaseModel

PRODUCT_FIELDS = (
    "product_id",
    "product_type",
    "brand",
    "weight",
    "price",
    "average_units_sold",
    "year_added",
    "stock_location",
)


class RawRecord(BaseModel):
    """
    One product row as ingested (read-only input to the pipeline).

    Attributes:
        product_id: Unique product identifier (primary key, never missing)
        product_type: Product category
        brand: Brand name, may hold the "-" placeholder
        weight: Free text combining a magnitude and a unit ("500 grams"),
                or an already numeric magnitude
        price: Unit price, may be negative or absent
        average_units_sold: Average units sold per month
        year_added: Year the product was added to the catalogue
        stock_location: Warehouse code, case-inconsistent
    """

    product_id: int
    product_type: str | None = None
    brand: str | None = None
    weight: str | Decimal | None = None
    price: Decimal | None = None
    average_units_sold: int | None = None
    year_added: int | None = None
    stock_location: str | None = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "product_id": 1,
                "product_type": "Produce",
                "brand": "TopBrand",
                "weight": "500 grams",
                "price": "2.50",
                "average_units_sold": 12,
                "year_added": 2018,
                "stock_location": "a",
            }
        }


class CleanRecord(BaseModel):
    """
    A cleaned product row.

    After a successful pipeline run every field is populated. Fields stay
    optional at the type level so RecordValidator can diagnose batches
    that break that contract instead of refusing to load them.
    """

    product_id: int
    product_type: str | None = None
    brand: str | None = None
    weight: Decimal | None = None
    price: Decimal | None = None
    average_units_sold: int | None = None
    year_added: int | None = None
    stock_location: str | None = None

    def to_raw(self) -> RawRecord:
        """Re-enter a cleaned record as pipeline input."""
        return RawRecord.model_validate(self.model_dump())

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "product_id": 1,
                "product_type": "Produce",
                "brand": "TopBrand",
                "weight": "500.00",
                "price": "2.50",
                "average_units_sold": 12,
                "year_added": 2018,
                "stock_location": "A",
            }
        }
