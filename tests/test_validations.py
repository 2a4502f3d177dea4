"""
Unit tests for data validation functions.

Tests check that the input/output schema validators accept valid data and
turn invalid data into LoadError.
"""

import pytest
import pandas as pd
from datetime import date, time
from pathlib import Path
import sys

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from retail_sales.exceptions import LoadError
from retail_sales.store import SALES_COLUMNS
from retail_sales.validations import validate_sales, validate_sales_clean
from retail_sales.validations.input_schemas import sales_schema
from retail_sales.validations.output_schemas import sales_clean_schema


def make_sales_df(**overrides):
    """Three typed sales rows, as produced by the loader."""
    data = {
        "transactions_id": pd.array([1, 2, 3], dtype="Int64"),
        "sale_date": [date(2022, 11, 5), date(2022, 11, 6), date(2022, 12, 1)],
        "sale_time": [time(9, 0), time(13, 0), time(18, 0)],
        "customer_id": pd.array([101, 102, 103], dtype="Int64"),
        "gender": ["Male", "Female", "Male"],
        "age": pd.array([30, 25, 40], dtype="Int64"),
        "category": ["Clothing", "Beauty", "Electronics"],
        "quantity": pd.array([1, 2, 3], dtype="Int64"),
        "price_per_unit": [50.0, 30.0, 300.0],
        "cogs": [20.0, 10.0, 100.0],
        "total_sale": [50.0, 60.0, 900.0],
    }
    data.update(overrides)
    return pd.DataFrame(data, columns=SALES_COLUMNS)


def make_clean_df(**overrides):
    """Three rows as stored after cleaning (int64 identity key)."""
    return make_sales_df(transactions_id=[1, 2, 3], **overrides)


class TestInputSalesValidation:
    """Test suite for freshly loaded rows."""

    def test_valid_sales_passes_validation(self):
        """Test that valid rows pass without change in size."""
        validated = validate_sales(make_sales_df())
        assert len(validated) == 3

    def test_missing_values_are_allowed(self):
        """Test that gaps are left for the cleaner, not rejected."""
        df = make_sales_df(
            age=pd.array([30, None, 40], dtype="Int64"),
            gender=["Male", None, "Male"],
            sale_time=[time(9, 0), None, time(18, 0)],
            total_sale=[50.0, None, 900.0],
        )
        validated = validate_sales(df)
        assert len(validated) == 3

    def test_negative_age_rejected(self):
        """Test that a present age must be non-negative."""
        df = make_sales_df(age=pd.array([30, -1, 40], dtype="Int64"))
        with pytest.raises(LoadError, match="age"):
            validate_sales(df)

    def test_zero_quantity_rejected(self):
        """Test that quantity must be positive."""
        df = make_sales_df(quantity=pd.array([1, 0, 3], dtype="Int64"))
        with pytest.raises(LoadError, match="quantity"):
            validate_sales(df)

    def test_negative_price_rejected(self):
        """Test that money columns cannot be negative."""
        df = make_sales_df(price_per_unit=[50.0, -30.0, 300.0])
        with pytest.raises(LoadError, match="price_per_unit"):
            validate_sales(df)

    def test_infinite_total_rejected(self):
        """Test that money columns must be finite."""
        df = make_sales_df(total_sale=[50.0, float("inf"), 900.0])
        with pytest.raises(LoadError, match="total_sale"):
            validate_sales(df)

    def test_duplicate_transaction_id_rejected(self):
        """Test that the identity key must be unique."""
        df = make_sales_df(transactions_id=pd.array([1, 1, 3], dtype="Int64"))
        with pytest.raises(LoadError, match="transactions_id"):
            validate_sales(df)

    def test_null_transaction_id_rejected(self):
        """Test that the identity key must be present."""
        df = make_sales_df(transactions_id=pd.array([1, None, 3], dtype="Int64"))
        with pytest.raises(LoadError, match="transactions_id"):
            validate_sales(df)


class TestOutputValidation:
    """Test suite for the cleaned table."""

    def test_valid_clean_passes_output_validation(self):
        """Test that a complete, typed table passes."""
        validated = validate_sales_clean(make_clean_df())
        assert len(validated) == 3

    def test_null_rejected_after_cleaning(self):
        """Test that no field may be missing once cleaning has run."""
        df = make_clean_df(category=["Clothing", None, "Electronics"])
        with pytest.raises(LoadError):
            validate_sales_clean(df)

    def test_infinite_amount_rejected_after_cleaning(self):
        """Test that a non-finite amount cannot reach the queries."""
        df = make_clean_df(cogs=[20.0, 10.0, float("inf")])
        with pytest.raises(LoadError):
            validate_sales_clean(df)

    def test_extra_column_rejected(self):
        """Test that the clean schema is strict."""
        df = make_clean_df().assign(shift="Morning")
        with pytest.raises(LoadError):
            validate_sales_clean(df)

    def test_non_time_sale_time_rejected(self):
        """Test that sale_time must hold time-of-day values."""
        df = make_clean_df(sale_time=["09:00", "13:00", "18:00"])
        with pytest.raises(LoadError):
            validate_sales_clean(df)


class TestSchemaCompliance:
    """Test that schemas are properly defined and enforceable."""

    def test_sales_schema_defined(self):
        """Test that the input schema covers every table column."""
        assert list(sales_schema.columns) == SALES_COLUMNS

    def test_clean_schema_defined(self):
        """Test that the output schema covers every table column."""
        assert set(sales_clean_schema.columns) == set(SALES_COLUMNS)

    def test_clean_schema_has_no_nullable_columns(self):
        """Test that nothing is nullable after cleaning."""
        assert not any(column.nullable for column in sales_clean_schema.columns.values())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
