"""
Retail sales analysis: bulk-load a sales CSV into an in-process table, drop
incomplete rows, and run aggregate reports over what is left.
"""

from .exceptions import LoadError, QueryError, ReportError, RetailSalesError
from .store import SALES_COLUMNS, SalesStore

__all__ = [
    "LoadError",
    "QueryError",
    "ReportError",
    "RetailSalesError",
    "SALES_COLUMNS",
    "SalesStore",
]

__version__ = "1.0.0"
