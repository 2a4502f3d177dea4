import pandas as pd

from retail_sales.logger import setup_logger
from retail_sales.store import SALES_COLUMNS, SalesStore

logger = setup_logger("etl.clean")

# Every column is required once cleaning is done.
REQUIRED_FIELDS = list(SALES_COLUMNS)


def _incomplete_mask(df: pd.DataFrame) -> pd.Series:
    return df[REQUIRED_FIELDS].isna().any(axis=1)


def find_incomplete_records(store: SalesStore) -> pd.DataFrame:
    """Records with at least one missing field, left in place."""
    df = store.frame
    incomplete = df[_incomplete_mask(df)].reset_index(drop=True)
    if not incomplete.empty:
        missing_counts = incomplete[REQUIRED_FIELDS].isna().sum()
        logger.info(f"Missing values per column:\n{missing_counts[missing_counts > 0]}")
    return incomplete


def remove_incomplete_records(store: SalesStore) -> int:
    """
    Delete every record with a missing field and return how many were removed.

    One pass over the whole table; there is nothing here that can fail.
    """
    initial_count = len(store)
    removed = store.delete(_incomplete_mask(store.frame))

    if removed > 0:
        logger.warning(f"Cleaning: removed {removed} incomplete records")
    logger.info(f"Cleaning completed: {len(store)} of {initial_count} records retained")
    return removed
