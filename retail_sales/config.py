"""
Config loading.

Settings live in a YAML file next to this module. RETAIL_SALES_CONFIG points
the loader at another file; explicit overrides (from the CLI) win over both.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from retail_sales.exceptions import RetailSalesError

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


def load_config(path: Optional[str] = None, **overrides: Any) -> Dict[str, Any]:
    config_path = Path(path or os.getenv("RETAIL_SALES_CONFIG") or DEFAULT_CONFIG_PATH)

    try:
        with open(config_path) as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise RetailSalesError(f"Cannot read config file {config_path}: {exc}") from exc

    if not isinstance(config, dict):
        raise RetailSalesError(f"Config file {config_path} must hold a mapping")

    config.setdefault("queries", {})
    config.setdefault("output_dir", None)

    for key, value in overrides.items():
        if value is not None:
            config[key] = value

    if not config.get("input_file"):
        raise RetailSalesError("Config is missing 'input_file'")

    return config
