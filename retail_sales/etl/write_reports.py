from pathlib import Path
from typing import Dict, Union

import pandas as pd

from retail_sales.exceptions import ReportError
from retail_sales.logger import setup_logger

logger = setup_logger("etl.write_reports")


def write_report_csv(df: pd.DataFrame, output_dir: Union[str, Path], name: str) -> str:
    """
    Write one query result to <output_dir>/<name>.csv and return the path.
    An empty result still gets a header row.
    """
    if not name:
        raise ReportError("Report name must not be empty")

    file_path = Path(output_dir) / f"{name}.csv"
    logger.info(f"Writing {len(df)} rows to {file_path}")

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(file_path, index=False)
    except OSError as e:
        logger.error(f"Failed to write report {file_path}: {e}")
        raise ReportError(f"Cannot write report {file_path}: {e}") from e

    return str(file_path)


def write_reports(results: Dict[str, pd.DataFrame], output_dir: Union[str, Path]) -> Dict[str, str]:
    """Write every query result and map each query name to its file."""
    saved_files = {name: write_report_csv(df, output_dir, name) for name, df in results.items()}
    logger.info(f"{len(saved_files)} reports written to {output_dir}")
    return saved_files
