from __future__ import annotations

"""
Configuration Domain Management.

Provides the default settings of a namespace session (partition identity,
capacity, dump indentation, diagnostics) and loads optional overrides from a
JSON file. The tree itself is never persisted; only settings are read.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from partitionfs.domain.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_CAPACITY,
    DEFAULT_LOG_LEVEL,
    DEFAULT_ROOT_NAME,
    INDENT_WIDTH,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default session configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Partition
        "root_name": DEFAULT_ROOT_NAME,
        "capacity": DEFAULT_CAPACITY,

        # Tree dump
        "indent_width": INDENT_WIDTH,

        # Diagnostics
        "log_level": DEFAULT_LOG_LEVEL,
        "log_file": None,
    }

# -----------------------------------------------------------------------------
# Loading Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the session configuration, merging a JSON file over the defaults.

    When no path is given, the file named by the PARTITIONFS_CONFIG
    environment variable is used if set. Unknown keys are discarded.
    The result is not validated; see validate_config.

    Args:
        path: Optional JSON file location.

    Returns:
        Dict[str, Any]: The merged configuration, or defaults on failure.
    """
    config = get_default_config()
    config_path = path or os.environ.get(CONFIG_ENV_VAR)

    if not config_path:
        return config

    if not os.path.exists(config_path):
        logger.debug(f"Config file not found at {config_path}. Returning defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    for key in config:
        if key in data:
            config[key] = data[key]

    logger.debug(f"Configuration loaded from {config_path}")
    return config
