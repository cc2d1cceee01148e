"""Load the smoke test run configuration from a YAML file."""

import asyncio
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from page_smoke_test.models.config import RunConfiguration


async def load_run_configuration(config_path: Path) -> RunConfiguration:
    """Load and validate a run configuration.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Validated run configuration

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the YAML is malformed, empty, or fails validation

    """
    if not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    content = await asyncio.to_thread(config_path.read_text, encoding="utf-8")

    try:
        data: Any = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        raise ValueError(f"Empty config file: {config_path}")

    try:
        return RunConfiguration.model_validate(data)
    except ValidationError as e:
        raise ValueError(
            f"Invalid run configuration schema in {config_path}: {e}"
        ) from e
