import pandas as pd
from pandera.errors import SchemaErrors

from retail_sales.exceptions import LoadError
from retail_sales.logger import setup_logger
from .input_schemas import sales_schema

logger = setup_logger("validation.input")


def describe_failures(failed: pd.DataFrame, limit: int = 5) -> str:
    """One-line summary of the first few pandera failure cases."""
    parts = []
    for _, case in failed.head(limit).iterrows():
        location = f"row {case['index']}" if pd.notna(case["index"]) else "table"
        parts.append(f"{case['column']}={case['failure_case']!r} ({case['check']}, {location})")
    if len(failed) > limit:
        parts.append(f"... {len(failed) - limit} more")
    return "; ".join(parts)


def validate_sales(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate parsed rows against the input schema.

    Missing values are allowed here (the cleaner removes them), but a present
    value that breaks a domain rule aborts the load.
    """
    logger.info(f"Starting sales validation on {len(df)} rows")
    try:
        validated_df = sales_schema.validate(df, lazy=True)
    except SchemaErrors as err:
        failed = err.failure_cases
        logger.error(f"Sales validation failed: {len(failed)} invalid values")
        logger.error(f"Errors summary:\n{failed.groupby(['column', 'check']).size()}")
        raise LoadError(f"Source rows failed validation: {describe_failures(failed)}") from err

    logger.info("Sales validation passed")
    return validated_df
