"""
Reading of the jailcell configuration file.

Every setting has a default, so a host whose jailhouse binary is on PATH
needs no configuration file at all.
"""

import logging
import tomllib
from pathlib import Path

from ..models.config import AppConfig
from .validators import validate_app_config

logger = logging.getLogger(__name__)


def load_main_config(config_path: Path) -> AppConfig:
    """
    Load and validate config.toml.

    Args:
        config_path: Location of the configuration file.

    Returns:
        The validated configuration, or the defaults when the file is absent.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML
        ValidationError: If a section or value is invalid
        OSError: If the file exists but cannot be read
    """
    if not config_path.is_file():
        logger.info(f"No configuration file at {config_path}, using defaults")
        return AppConfig()

    logger.info(f"Loading configuration from: {config_path}")
    with open(config_path, "rb") as f:
        config_data = tomllib.load(f)

    app_config = validate_app_config(config_data)
    logger.info(f"Using jailhouse binary '{app_config.tool.binary}'")
    return app_config
