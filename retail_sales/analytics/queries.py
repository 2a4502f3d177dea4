"""
Aggregate read queries over the retail_sales table.

Every query takes the store (plus optional filter arguments) and returns a
DataFrame with the columns of the matching report. None of them mutate the
store: they all work on the snapshot returned by `SalesStore.frame`.
"""

import functools
import inspect
from datetime import date, datetime
from numbers import Real
from typing import Callable, Dict, Iterable, Optional

import pandas as pd

from retail_sales.exceptions import QueryError
from retail_sales.logger import setup_logger
from retail_sales.store import SalesStore

logger = setup_logger("analytics.queries")

SHIFTS = ("Morning", "Afternoon", "Evening")


# --------------------------------------------------
# Argument checks
# --------------------------------------------------

def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), "%Y-%m-%d").date()
        except ValueError as e:
            raise QueryError(f"Invalid sale date {value!r}, expected YYYY-MM-DD") from e
    raise QueryError(f"Invalid sale date {value!r}, expected YYYY-MM-DD")


def _as_int(value, name: str, minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise QueryError(f"{name} must be an integer, got {value!r}")
    if minimum is not None and value < minimum:
        raise QueryError(f"{name} must be >= {minimum}, got {value}")
    if maximum is not None and value > maximum:
        raise QueryError(f"{name} must be <= {maximum}, got {value}")
    return value


def _as_category(value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise QueryError(f"Category must be a non-empty string, got {value!r}")
    return value.strip()


def _category_mask(df: pd.DataFrame, category: str) -> pd.Series:
    # Matches the case-insensitive collation the table was queried with
    return (df["category"].str.lower() == category.lower()).fillna(False).astype(bool)


def _sale_periods(df: pd.DataFrame) -> pd.DataFrame:
    dates = pd.to_datetime(df["sale_date"])
    return df.assign(year=dates.dt.year.astype("Int64"), month=dates.dt.month.astype("Int64"))


# --------------------------------------------------
# Table overview
# --------------------------------------------------

def count_records(store: SalesStore) -> pd.DataFrame:
    return pd.DataFrame({"total_records": [len(store)]})


def count_distinct_customers(store: SalesStore) -> pd.DataFrame:
    return pd.DataFrame({"unique_customers": [int(store.frame["customer_id"].nunique())]})


def list_categories(store: SalesStore) -> pd.DataFrame:
    categories = sorted(store.frame["category"].dropna().unique().tolist())
    return pd.DataFrame({"category": categories})


# --------------------------------------------------
# Row filters
# --------------------------------------------------

def sales_on_date(store: SalesStore, sale_date="2022-11-05") -> pd.DataFrame:
    """All sales made on one calendar day."""
    target = _as_date(sale_date)
    df = store.frame
    return df[df["sale_date"] == target].reset_index(drop=True)


def category_sales_in_month(
    store: SalesStore,
    category: str = "Clothing",
    min_quantity: int = 4,
    year: int = 2022,
    month: int = 11,
) -> pd.DataFrame:
    """
    Sales in one category with at least `min_quantity` units, made in the
    given month of the given year.
    """
    category = _as_category(category)
    min_quantity = _as_int(min_quantity, "min_quantity", minimum=0)
    year = _as_int(year, "year", minimum=1)
    month = _as_int(month, "month", minimum=1, maximum=12)

    df = store.frame
    periods = _sale_periods(df)
    mask = (
        _category_mask(df, category)
        & (df["quantity"] >= min_quantity).fillna(False).astype(bool)
        & (periods["year"] == year).fillna(False).astype(bool)
        & (periods["month"] == month).fillna(False).astype(bool)
    )
    return df[mask].reset_index(drop=True)


def high_value_sales(store: SalesStore, threshold: float = 1000) -> pd.DataFrame:
    """Sales whose total is strictly above `threshold`."""
    if isinstance(threshold, bool) or not isinstance(threshold, Real):
        raise QueryError(f"threshold must be a number, got {threshold!r}")
    df = store.frame
    return df[(df["total_sale"] > threshold).fillna(False)].reset_index(drop=True)


# --------------------------------------------------
# Aggregations
# --------------------------------------------------

def category_sales_summary(store: SalesStore) -> pd.DataFrame:
    """Net sales and order count per category."""
    return (
        store.frame
        .groupby("category")
        .agg(net_sale=("total_sale", "sum"), total_orders=("transactions_id", "size"))
        .reset_index()
    )


def average_customer_age(store: SalesStore, category: str = "Beauty") -> pd.DataFrame:
    """Average buyer age in one category, rounded to 2 decimals (None if no sales)."""
    category = _as_category(category)
    df = store.frame
    ages = df.loc[_category_mask(df, category), "age"].dropna()
    avg_age = round(float(ages.mean()), 2) if len(ages) else None
    return pd.DataFrame({"avg_age": [avg_age]})


def transactions_by_category_gender(store: SalesStore) -> pd.DataFrame:
    counts = store.frame.groupby(["category", "gender"]).size().reset_index(name="total_trans")
    return counts.sort_values(["gender", "category"], kind="stable").reset_index(drop=True)


def best_selling_months(store: SalesStore, top_n: int = 2) -> pd.DataFrame:
    """
    Average sale per month, ranked within each year.

    Months are dense-ranked by their unrounded average (highest first), so
    equal averages share a rank and no rank is skipped. Every month ranked
    `top_n` or better is returned, ordered by year then rank.
    """
    top_n = _as_int(top_n, "top_n", minimum=1)

    monthly = (
        _sale_periods(store.frame)
        .groupby(["year", "month"])["total_sale"]
        .mean()
        .reset_index(name="avg_total_sale")
    )
    monthly["rank"] = (
        monthly.groupby("year")["avg_total_sale"]
        .rank(method="dense", ascending=False)
        .astype(int)
    )
    monthly["avg_sale"] = monthly["avg_total_sale"].round(2)

    best = monthly[monthly["rank"] <= top_n].sort_values(["year", "rank", "month"])
    return best[["year", "month", "avg_sale", "rank"]].astype({"year": int, "month": int}).reset_index(drop=True)


def top_customers(store: SalesStore, limit: int = 5) -> pd.DataFrame:
    """Customers with the highest summed sales; ties go to the lower customer_id."""
    limit = _as_int(limit, "limit", minimum=1)
    totals = store.frame.groupby("customer_id")["total_sale"].sum().reset_index(name="total_sales")
    return (
        totals.sort_values(["total_sales", "customer_id"], ascending=[False, True])
        .head(limit)
        .reset_index(drop=True)
    )


def unique_customers_by_category(store: SalesStore) -> pd.DataFrame:
    return store.frame.groupby("category")["customer_id"].nunique().reset_index(name="cnt_unique_cs")


# --------------------------------------------------
# Shifts
# --------------------------------------------------

def shift_for_hour(hour: int) -> str:
    """Morning before 12:00, Afternoon from 12 through 17, Evening after."""
    if hour < 12:
        return "Morning"
    if hour <= 17:
        return "Afternoon"
    return "Evening"


def assign_shifts(sale_times: pd.Series) -> pd.Series:
    return sale_times.map(lambda t: shift_for_hour(t.hour), na_action="ignore")


def orders_by_shift(store: SalesStore) -> pd.DataFrame:
    """Order count per shift, always listing Morning, Afternoon and Evening."""
    counts = assign_shifts(store.frame["sale_time"]).value_counts()
    return pd.DataFrame({
        "shift": list(SHIFTS),
        "total_orders": [int(counts.get(shift, 0)) for shift in SHIFTS],
    })


# --------------------------------------------------
# Registry
# --------------------------------------------------

QUERIES: Dict[str, Callable[..., pd.DataFrame]] = {
    "count_records": count_records,
    "count_distinct_customers": count_distinct_customers,
    "list_categories": list_categories,
    "sales_on_date": sales_on_date,
    "category_sales_in_month": category_sales_in_month,
    "category_sales_summary": category_sales_summary,
    "average_customer_age": average_customer_age,
    "high_value_sales": high_value_sales,
    "transactions_by_category_gender": transactions_by_category_gender,
    "best_selling_months": best_selling_months,
    "top_customers": top_customers,
    "unique_customers_by_category": unique_customers_by_category,
    "orders_by_shift": orders_by_shift,
}


def bind_queries(params: Optional[Dict[str, dict]] = None) -> Dict[str, Callable[[SalesStore], pd.DataFrame]]:
    """
    Bind configured filter arguments to each query.
    The result maps every query name to a callable that takes only the store.
    """
    params = params or {}
    unknown = sorted(set(params) - set(QUERIES))
    if unknown:
        raise QueryError(f"Parameters given for unknown queries: {unknown}")

    bound = {}
    for name, func in QUERIES.items():
        kwargs = params.get(name) or {}
        try:
            inspect.signature(func).bind(None, **kwargs)
        except TypeError as e:
            raise QueryError(f"Invalid parameters for {name}: {e}") from e
        bound[name] = functools.partial(func, **kwargs)
    return bound


def run_queries(
    store: SalesStore,
    queries: Dict[str, Callable[[SalesStore], pd.DataFrame]],
    names: Optional[Iterable[str]] = None,
) -> Dict[str, pd.DataFrame]:
    """Run the selected queries (all by default) in registry order."""
    selected = list(queries) if names is None else list(names)
    unknown = [name for name in selected if name not in queries]
    if unknown:
        raise QueryError(f"Unknown queries: {unknown}. Available: {list(queries)}")

    results = {}
    for name in selected:
        results[name] = queries[name](store)
        logger.info(f"Query {name}: {len(results[name])} rows")
    return results
