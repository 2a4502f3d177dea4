"""
In-process retail_sales table.

The store owns a single pandas DataFrame with one row per sale. It only knows
how to truncate, bulk-insert, delete by mask and hand out snapshots; parsing
and cleaning rules live in the etl modules.
"""

import pandas as pd

from retail_sales.logger import setup_logger

logger = setup_logger("store")

# Fixed column order of the source file and the table.
SALES_COLUMNS = [
    "transactions_id",
    "sale_date",
    "sale_time",
    "customer_id",
    "gender",
    "age",
    "category",
    "quantity",
    "price_per_unit",
    "cogs",
    "total_sale",
]

SALES_DTYPES = {
    "transactions_id": "int64",
    "sale_date": "object",
    "sale_time": "object",
    "customer_id": "Int64",
    "gender": str,
    "age": "Int64",
    "category": str,
    "quantity": "Int64",
    "price_per_unit": "float64",
    "cogs": "float64",
    "total_sale": "float64",
}


def empty_sales_frame() -> pd.DataFrame:
    return pd.DataFrame({col: pd.Series(dtype=dtype) for col, dtype in SALES_DTYPES.items()})


class SalesStore:
    """
    Flat record store keyed by transactions_id.

    Reads go through `frame`, which returns a copy, so queries cannot mutate
    the stored rows.
    """

    def __init__(self, table_name: str = "retail_sales"):
        self.table_name = table_name
        self._frame = empty_sales_frame()

    def __len__(self) -> int:
        return len(self._frame)

    def __repr__(self) -> str:
        return f"SalesStore(table_name={self.table_name!r}, rows={len(self)})"

    @property
    def frame(self) -> pd.DataFrame:
        return self._frame.copy()

    def truncate(self) -> None:
        logger.debug(f"Truncating {self.table_name} ({len(self)} rows)")
        self._frame = empty_sales_frame()

    def insert(self, df: pd.DataFrame) -> int:
        """Append rows to the table and return how many were inserted."""
        missing = [col for col in SALES_COLUMNS if col not in df.columns]
        if missing:
            raise ValueError(f"Cannot insert into {self.table_name}: missing columns {missing}")

        rows = df[SALES_COLUMNS]
        if self._frame.empty:
            combined = rows.copy()
        else:
            combined = pd.concat([self._frame, rows], ignore_index=True)

        duplicated = combined["transactions_id"].duplicated(keep=False)
        if duplicated.any():
            ids = sorted(combined.loc[duplicated, "transactions_id"].unique().tolist())
            raise ValueError(f"Duplicate transactions_id in {self.table_name}: {ids[:10]}")

        self._frame = combined.reset_index(drop=True)
        logger.debug(f"Inserted {len(rows)} rows into {self.table_name}")
        return len(rows)

    def delete(self, mask: pd.Series) -> int:
        """Delete the rows selected by a boolean mask aligned to `frame`."""
        mask = mask.reindex(self._frame.index, fill_value=False).astype(bool)
        removed = int(mask.sum())
        if removed:
            self._frame = self._frame.loc[~mask].reset_index(drop=True)
        logger.debug(f"Deleted {removed} rows from {self.table_name}")
        return removed
