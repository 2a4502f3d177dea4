"""
Aggregate queries over the cleaned retail_sales table.
"""

from .queries import QUERIES, SHIFTS, bind_queries, run_queries, shift_for_hour

__all__ = ["QUERIES", "SHIFTS", "bind_queries", "run_queries", "shift_for_hour"]
