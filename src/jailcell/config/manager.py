"""
Configuration management.

This module provides the main configuration loading interface, caching the
validated configuration so it is loaded only once per process.
"""

import logging
from pathlib import Path
from typing import Optional

from ..models.config import AppConfig
from ..validation import ErrorSeverity, ValidationError, handle_config_error
from .loader import load_main_config

logger = logging.getLogger(__name__)

# The loaded AppConfig, populated on first access.
_CONFIG: Optional[AppConfig] = None

# Default location of the configuration file, relative to the repository root.
# Overridden by the CLI's --config option and by tests.
_CONFIG_FILE_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"


def set_config_path(config_path: Path) -> None:
    """
    Set a custom configuration file path.

    The cached configuration is dropped so the next get_config() call
    loads from the new path.
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path)
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    """
    Clear the cached configuration, forcing a reload on next access.
    """
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def _load_config(config_path: Path) -> AppConfig:
    """
    Load the application configuration, logging any failure.

    Raises:
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    try:
        return load_main_config(config_path)
    except (OSError, ValueError, ValidationError) as e:
        handle_config_error(
            error=e,
            context=f"loading {config_path}",
            severity=ErrorSeverity.CRITICAL,
            reraise=False,
            logger=logger
        )
        raise


def get_config() -> AppConfig:
    """
    Get the application configuration, loading it if necessary.

    Returns:
        The cached AppConfig instance

    Raises:
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(_CONFIG_FILE_PATH)
    return _CONFIG
