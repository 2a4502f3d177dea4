import time
from typing import Any, Dict, Iterable, Optional

from retail_sales.analytics import bind_queries, run_queries
from retail_sales.etl import (
    find_incomplete_records,
    load_retail_sales,
    remove_incomplete_records,
    write_reports,
)
from retail_sales.exceptions import RetailSalesError
from retail_sales.logger import setup_logger
from retail_sales.store import SalesStore
from retail_sales.validations import validate_sales_clean

logger = setup_logger("pipeline")


def run_pipeline(
    config: Dict[str, Any],
    store: Optional[SalesStore] = None,
    query_names: Optional[Iterable[str]] = None,
) -> Dict[str, Any]:
    """
    Load -> inspect -> clean -> validate -> query -> (optionally) write reports.

    Returns a summary with row counts, the query result frames and the paths
    of any written report files. Errors from any stage are logged and re-raised.
    """
    store = store if store is not None else SalesStore()
    batch_start = time.perf_counter()

    try:
        # Bind parameters first so a bad config fails before the table is touched
        queries = bind_queries(config.get("queries"))

        rows_loaded = load_retail_sales(config["input_file"], store)
        logger.info(f"✓ Loaded {rows_loaded} rows")

        incomplete = find_incomplete_records(store)
        if not incomplete.empty:
            ids = incomplete["transactions_id"].tolist()
            logger.warning(f"⚠ {len(incomplete)} records have missing fields: {ids[:10]}")

        rows_removed = remove_incomplete_records(store)
        validate_sales_clean(store.frame)
        logger.info(f"✓ Cleaning passed: {len(store)} records ready ({rows_removed} removed)")

        results = run_queries(store, queries, query_names)
        logger.info(f"✓ {len(results)} queries completed")

        saved_files = {}
        if config.get("output_dir"):
            saved_files = write_reports(results, config["output_dir"])

    except RetailSalesError as e:
        logger.error(f"✗ Pipeline failed: {e}")
        raise

    logger.info(f"Pipeline finished in {time.perf_counter() - batch_start:.3f} seconds")
    return {
        "input_file": str(config["input_file"]),
        "rows_loaded": rows_loaded,
        "rows_removed": rows_removed,
        "rows_remaining": len(store),
        "results": results,
        "saved_files": saved_files,
    }
