"""
Pytest configuration and fixtures for the retail sales tests.

This file is automatically discovered by pytest and provides
shared fixtures for all test modules.
"""

import csv
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from retail_sales.etl import load_retail_sales, remove_incomplete_records
from retail_sales.store import SalesStore


# Header as exported by the source system (note the "quantiy" spelling; only
# the field count is checked on load).
HEADER = [
    "transactions_id", "sale_date", "sale_time", "customer_id", "gender", "age",
    "category", "quantiy", "price_per_unit", "cogs", "total_sale",
]

# Eight complete sales across two years, three categories and all shifts.
SAMPLE_ROWS = [
    [1, "2022-11-05", "09:15:00", 101, "Male", 30, "Clothing", 4, 50, 20, 200],
    [2, "2022-11-05", "13:00:00", 102, "Female", 25, "Beauty", 2, 300, 100, 600],
    [3, "2022-11-20", "18:30:00", 101, "Male", 30, "Clothing", 3, 500, 150, 1500],
    [4, "2022-12-01", "10:00:00", 103, "Female", 40, "Electronics", 1, 1200, 400, 1200],
    [5, "2022-12-15", "17:59:00", 104, "Male", 35, "Beauty", 1, 50, 15, 50],
    [6, "2023-01-10", "20:00:00", 102, "Female", 25, "Clothing", 5, 30, 10, 150],
    [7, "2023-02-14", "12:00:00", 105, "Female", 52, "Beauty", 2, 25, 8, 50],
    [8, "2023-02-20", "11:59:00", 106, "Male", 19, "Electronics", 4, 500, 200, 2000],
]


@pytest.fixture
def write_sales_csv(tmp_path):
    """
    Factory writing rows (plus a header) to a CSV file in a temp directory.
    None cells are written as empty fields.
    """
    def _write(rows, name="retail_sales.csv", header=HEADER):
        path = tmp_path / name
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            if header is not None:
                writer.writerow(header)
            writer.writerows(rows)
        return path

    return _write


@pytest.fixture
def sample_csv(write_sales_csv):
    return write_sales_csv(SAMPLE_ROWS)


@pytest.fixture
def loaded_store(sample_csv):
    """A store holding the cleaned sample rows."""
    store = SalesStore()
    load_retail_sales(sample_csv, store)
    remove_incomplete_records(store)
    return store


@pytest.fixture
def store_from_rows(write_sales_csv):
    """Factory loading and cleaning arbitrary rows into a fresh store."""
    def _build(rows):
        store = SalesStore()
        load_retail_sales(write_sales_csv(rows), store)
        remove_incomplete_records(store)
        return store

    return _build
