"""
Retail sales analysis CLI.

USAGE:
  python -m retail_sales                                   # Run every query with config.yaml
  python -m retail_sales --input data/sales.csv            # Different source file
  python -m retail_sales --query top_customers --query orders_by_shift
  python -m retail_sales --output-dir ./reports            # Also write one CSV per query
  python -m retail_sales --no-reports                      # Print only
  python -m retail_sales --list-queries
"""
import argparse
import sys

import pandas as pd

from retail_sales.analytics import QUERIES
from retail_sales.config import load_config
from retail_sales.exceptions import RetailSalesError
from retail_sales.logger import set_level, setup_logger
from retail_sales.pipeline import run_pipeline

logger = setup_logger("retail_sales")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="retail_sales",
        description="Load, clean and analyse retail sales data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", help="Path to a YAML config file")
    parser.add_argument("--input", dest="input_file", help="Source CSV file")
    parser.add_argument("--output-dir", help="Directory for per-query CSV reports")
    parser.add_argument("--no-reports", action="store_true", help="Do not write report files")
    parser.add_argument(
        "--query", dest="queries", action="append", metavar="NAME",
        help="Run only this query (repeatable)",
    )
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--list-queries", action="store_true", help="List query names and exit")
    return parser


def print_results(results: dict) -> None:
    with pd.option_context("display.max_rows", 50, "display.width", 120):
        for name, df in results.items():
            print("\n" + "=" * 70)
            print(f"  {name}")
            print("=" * 70)
            print(df.to_string(index=False) if not df.empty else "(no rows)")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.list_queries:
        for name in QUERIES:
            print(name)
        return 0

    if args.log_level:
        set_level(args.log_level)

    try:
        config = load_config(args.config, input_file=args.input_file, output_dir=args.output_dir)
        if args.no_reports:
            config["output_dir"] = None
        summary = run_pipeline(config, query_names=args.queries)
    except RetailSalesError as e:
        logger.error(f"Run failed: {e}")
        return 1

    print_results(summary["results"])
    print(
        f"\nLoaded {summary['rows_loaded']} rows, removed {summary['rows_removed']} incomplete, "
        f"{summary['rows_remaining']} analysed."
    )
    for name, path in summary["saved_files"].items():
        print(f"  • {name}: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
