"""
Pandera schemas and validators for freshly loaded and cleaned sales rows.
"""

from .validate_inputs import validate_sales
from .validate_outputs import validate_sales_clean

__all__ = ["validate_sales", "validate_sales_clean"]
