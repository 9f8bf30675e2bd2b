"""Loader for harness.yaml configuration files."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from jdx_harness.models.config import HarnessConfig


def load_config(config_path: Path) -> HarnessConfig:
    """Load and validate a harness configuration file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Parsed and validated HarnessConfig

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If YAML is invalid, empty or fails schema validation

    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        raise ValueError(f"Empty config file: {config_path}")

    if not isinstance(data, dict):
        raise ValueError(
            f"Invalid harness config schema in {config_path}: expected a mapping"
        )

    try:
        return HarnessConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid harness config schema in {config_path}: {e}") from e
