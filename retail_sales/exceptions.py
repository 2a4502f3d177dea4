"""
Error types raised by the retail sales pipeline.

Loading, querying and report writing each fail with their own exception so a
caller can tell which stage of a run broke. Cleaning has no error type: it is
an unconditional filter-and-delete.
"""


class RetailSalesError(Exception):
    """Base class for pipeline errors."""


class LoadError(RetailSalesError):
    """The source file is missing, unreadable, or holds a malformed row."""


class QueryError(RetailSalesError):
    """A query received malformed filter input."""


class ReportError(RetailSalesError):
    """A query result could not be written to disk."""
