"""Configuration file handling for the s3tool CLI.

Option defaults can be stored in a JSON file so operators do not need to
repeat them (region, profile, exit codes, ...). Keys are option names with
underscores, e.g. ``{"region": "eu-west-1", "rc_changed": 3}``.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "S3TOOL_CONFIG"


def get_config_dir() -> Path:
    """Get the configuration directory for s3tool.

    Returns:
        Path to ~/.s3tool or equivalent.
    """
    return Path.home() / ".s3tool"


def get_config_file() -> Path:
    """Get the path to the config file, honouring S3TOOL_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return get_config_dir() / "config.json"


def load_config() -> dict[str, Any]:
    """Load option defaults from the config file.

    Returns:
        The decoded JSON object, or an empty dict if there is no file.

    Raises:
        ValueError: If the file is not a JSON object.
    """
    config_file = get_config_file()
    if not config_file.exists():
        return {}
    data = json.loads(config_file.read_text())
    if not isinstance(data, dict):
        raise ValueError(f"{config_file} must contain a JSON object")
    logger.debug("Loaded defaults from %s", config_file)
    return data
