"""
Load, clean and export steps of the retail sales pipeline.
"""

from .clean import find_incomplete_records, remove_incomplete_records
from .load_csv import load_retail_sales, parse_sales_rows, read_sales_csv
from .write_reports import write_report_csv, write_reports

__all__ = [
    "find_incomplete_records",
    "load_retail_sales",
    "parse_sales_rows",
    "read_sales_csv",
    "remove_incomplete_records",
    "write_report_csv",
    "write_reports",
]
