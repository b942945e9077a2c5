"""Configuration loading utilities.

Supports YAML and JSON configuration files with schema validation.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from softnas_monitor.core.schemas import PluginConfig


def load_config(path: Path | str) -> PluginConfig:
    """Load and validate a plugin configuration file.

    Args:
        path: Path to YAML or JSON configuration file

    Returns:
        Validated PluginConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If file format is unsupported
        pydantic.ValidationError: If config is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    suffix = path.suffix.lower()
    with open(path, encoding="utf-8") as f:
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported config format: {suffix}. Use .yaml, .yml, or .json")

    return PluginConfig.model_validate(data or {})


def merge_overrides(config: PluginConfig, overrides: dict[str, Any]) -> PluginConfig:
    """Return a copy of `config` with every non-None override applied and re-validated."""
    data = config.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    return PluginConfig.model_validate(data)
