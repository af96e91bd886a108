"""
Raw product batch readers.
"""

from .csv_reader import PRODUCT_SCHEMA, CSVReader
from .file_reader import FileReader
from .table_reader import ProductTableReader

__all__ = [
    "PRODUCT_SCHEMA",
    "CSVReader",
    "FileReader",
    "ProductTableReader",
]
