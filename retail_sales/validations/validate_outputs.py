import pandas as pd
from pandera.errors import SchemaErrors

from retail_sales.exceptions import LoadError
from retail_sales.logger import setup_logger
from .output_schemas import sales_clean_schema
from .validate_inputs import describe_failures

logger = setup_logger("validation.output")


def validate_sales_clean(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate the cleaned store before any query runs against it.
    """
    logger.info(f"Starting output validation on {len(df)} records")

    try:
        validated_df = sales_clean_schema.validate(df, lazy=True)
    except SchemaErrors as err:
        failed = err.failure_cases
        logger.error(f"Output validation failed with {len(failed)} issues")
        logger.error(f"Failure summary:\n{failed.groupby(['column', 'check']).size()}")
        raise LoadError(f"Cleaned table is inconsistent: {describe_failures(failed)}") from err

    logger.info("Output validation passed")
    return validated_df
