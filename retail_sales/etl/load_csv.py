import csv
import time
from pathlib import Path
from typing import Union

import pandas as pd

from retail_sales.exceptions import LoadError
from retail_sales.logger import setup_logger
from retail_sales.store import SALES_COLUMNS, SalesStore
from retail_sales.validations import validate_sales

logger = setup_logger("etl.load_csv")

INTEGER_COLUMNS = ["transactions_id", "customer_id", "age", "quantity"]
DECIMAL_COLUMNS = ["price_per_unit", "cogs", "total_sale"]
TEXT_COLUMNS = ["gender", "category"]

# The header is line 1, so data row i (0-based) sits on line i + 2.
FIRST_DATA_LINE = 2

# Whole numbers at or beyond 2**63 do not fit the int64 columns
INT64_LIMIT = float(2 ** 63)


def read_sales_csv(source: Union[str, Path]) -> pd.DataFrame:
    """
    Read the raw source into string columns named after the table.
    The header line is skipped; only its field count is checked.
    """
    logger.info(f"Reading sales rows from {source}")
    try:
        raw_df = pd.read_csv(
            source,
            header=0,
            dtype=str,
            skipinitialspace=True,
            index_col=False,
        )
    except FileNotFoundError as e:
        raise LoadError(f"Source file not found: {source}") from e
    except pd.errors.EmptyDataError as e:
        raise LoadError(f"Source file is empty: {source}") from e
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
        raise LoadError(f"Cannot read source file {source}: {e}") from e

    if len(raw_df.columns) != len(SALES_COLUMNS):
        raise LoadError(
            f"Expected {len(SALES_COLUMNS)} fields per row, header has {len(raw_df.columns)}"
        )
    _check_row_widths(source)

    raw_df.columns = SALES_COLUMNS
    # Whitespace-only cells count as missing
    for column in SALES_COLUMNS:
        stripped = raw_df[column].str.strip()
        raw_df[column] = stripped.mask(stripped == "")
    logger.info(f"Successfully read {len(raw_df)} rows")
    return raw_df


def _check_row_widths(source: Union[str, Path]) -> None:
    """
    Reject data rows that do not have exactly one field per table column.
    read_csv pads short rows with NaN and drops extra trailing fields.
    """
    try:
        with open(source, newline="", encoding="utf-8") as f:
            reader = csv.reader(f, skipinitialspace=True)
            next(reader, None)
            for row in reader:
                # Blank lines are skipped by read_csv too
                if row and len(row) != len(SALES_COLUMNS):
                    raise LoadError(
                        f"Expected {len(SALES_COLUMNS)} fields per row, "
                        f"line {reader.line_num} has {len(row)}"
                    )
    except (csv.Error, UnicodeDecodeError, OSError) as e:
        raise LoadError(f"Cannot read source file {source}: {e}") from e


def _malformed(raw: pd.Series, parsed: pd.Series) -> pd.Series:
    """Cells that held a value the parser could not convert."""
    return raw.notna() & parsed.isna()


def _raise_malformed(column: str, raw: pd.Series, bad: pd.Series) -> None:
    rows = raw[bad]
    lines = ", ".join(str(i + FIRST_DATA_LINE) for i in rows.index[:5])
    sample = rows.iloc[0]
    raise LoadError(
        f"Malformed {column} value {sample!r} on line(s) {lines}"
        + (f" and {len(rows) - 5} more" if len(rows) > 5 else "")
    )


def _parse_integer(raw: pd.Series) -> pd.Series:
    numeric = pd.to_numeric(raw, errors="coerce")
    fractional = numeric.notna() & (numeric % 1 != 0)
    out_of_range = numeric.astype("float64").abs() >= INT64_LIMIT
    bad = _malformed(raw, numeric) | fractional | out_of_range
    if bad.any():
        _raise_malformed(raw.name, raw, bad)
    return numeric.astype("Int64")


def _parse_decimal(raw: pd.Series) -> pd.Series:
    numeric = pd.to_numeric(raw, errors="coerce").astype("float64")
    infinite = numeric.abs() == float("inf")
    bad = _malformed(raw, numeric) | infinite
    if bad.any():
        _raise_malformed(raw.name, raw, bad)
    return numeric


def _parse_date(raw: pd.Series) -> pd.Series:
    parsed = pd.to_datetime(raw, format="%Y-%m-%d", errors="coerce")
    bad = _malformed(raw, parsed)
    if bad.any():
        _raise_malformed(raw.name, raw, bad)
    return parsed.dt.date.astype(object).where(parsed.notna(), None)


def _parse_time(raw: pd.Series) -> pd.Series:
    # HH:MM:SS is the export format; HH:MM shows up in hand-edited files
    parsed = pd.to_datetime(raw, format="%H:%M:%S", errors="coerce")
    parsed = parsed.fillna(pd.to_datetime(raw, format="%H:%M", errors="coerce"))
    bad = _malformed(raw, parsed)
    if bad.any():
        _raise_malformed(raw.name, raw, bad)
    return parsed.dt.time.astype(object).where(parsed.notna(), None)


def parse_sales_rows(raw_df: pd.DataFrame) -> pd.DataFrame:
    """
    Convert raw string cells into typed table columns.

    Missing cells stay missing. A present cell that cannot be converted
    raises LoadError naming the column and source line.
    """
    parsed = {}
    for column in SALES_COLUMNS:
        raw = raw_df[column]
        if column in INTEGER_COLUMNS:
            parsed[column] = _parse_integer(raw)
        elif column in DECIMAL_COLUMNS:
            parsed[column] = _parse_decimal(raw)
        elif column == "sale_date":
            parsed[column] = _parse_date(raw)
        elif column == "sale_time":
            parsed[column] = _parse_time(raw)
        else:
            parsed[column] = raw

    return pd.DataFrame(parsed, columns=SALES_COLUMNS)


def load_retail_sales(source: Union[str, Path], store: SalesStore) -> int:
    """
    Replace the store's contents with the rows in `source`.

    The table is truncated before reading, so a failed load leaves it empty.
    Returns the number of rows inserted.
    """
    batch_start = time.perf_counter()
    logger.info("=" * 50)
    logger.info(f"Loading {store.table_name} table")
    logger.info("=" * 50)

    try:
        logger.info(f">> Truncating table: {store.table_name}")
        store.truncate()

        logger.info(f">> Inserting data into: {store.table_name}")
        sales_df = parse_sales_rows(read_sales_csv(source))
        sales_df = validate_sales(sales_df)
        sales_df["transactions_id"] = sales_df["transactions_id"].astype("int64")
        inserted = store.insert(sales_df)

    except LoadError as e:
        logger.error(f"Error occurred while loading {store.table_name}: {e}")
        raise
    except ValueError as e:
        logger.error(f"Error occurred while loading {store.table_name}: {e}")
        store.truncate()
        raise LoadError(f"Cannot insert rows from {source}: {e}") from e

    logger.info(f">> Load duration: {time.perf_counter() - batch_start:.3f} seconds")
    logger.info(f"Loaded {inserted} rows into {store.table_name}")
    return inserted
