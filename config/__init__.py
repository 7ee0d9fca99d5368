"""Configuration loading utilities."""

from pathlib import Path
from typing import Any

import yaml


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML file shipped in the config/ directory."""
    config_path = Path(__file__).parent / filename
    with open(config_path) as f:
        return yaml.safe_load(f)
