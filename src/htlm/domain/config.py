from __future__ import annotations

"""
Configuration Domain Management.

Provides the default build configuration and loads overrides from the
project-level 'htlm.config.json' file. The file uses the historical
camelCase keys (srcDir, outDir); they are mapped onto the snake_case keys
used throughout the pipeline.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from htlm.domain.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_OUT_DIR,
    DEFAULT_SRC_DIR,
    OUTPUT_EXTENSION,
    SOURCE_EXTENSION,
)

logger = logging.getLogger(__name__)

# Accepted file keys -> pipeline keys
_FILE_KEY_ALIASES: Dict[str, str] = {
    "srcDir": "src_dir",
    "outDir": "out_dir",
    "sourceExtension": "source_extension",
    "outputExtension": "output_extension",
}


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default build configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "src_dir": DEFAULT_SRC_DIR,
        "out_dir": DEFAULT_OUT_DIR,

        # File Mapping
        "source_extension": SOURCE_EXTENSION,
        "output_extension": OUTPUT_EXTENSION,

        # Safety
        "overwrite": True,
    }


def get_config_path(base_dir: Optional[str] = None) -> str:
    """Location of the project configuration file (defaults to the CWD)."""
    return os.path.join(base_dir or os.getcwd(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def read_config_file(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Read the JSON configuration file, mapping camelCase keys to pipeline keys.

    A missing file is not an error. An unreadable or malformed file is
    reported and ignored.

    Args:
        config_path: Explicit file path. Defaults to 'htlm.config.json' in the CWD.

    Returns:
        Dict[str, Any]: Configuration values found in the file.
    """
    path = config_path or get_config_path()

    if not os.path.exists(path):
        logger.debug(f"Config file not found at {path}. Using defaults.")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to read config file {path}: {e}. Using defaults.")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring config file {path}: expected a JSON object.")
        return {}

    file_config: Dict[str, Any] = {}
    for key, value in data.items():
        file_config[_FILE_KEY_ALIASES.get(key, key)] = value

    logger.debug(f"Loaded configuration from {path}")
    return file_config


# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------
def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Combine the defaults with the values of the configuration file.
    """
    config = get_default_config()
    config.update(read_config_file(config_path))
    return config
