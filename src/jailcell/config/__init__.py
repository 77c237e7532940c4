"""
Configuration management for the jailcell package.

This module provides a clean interface for loading, validating, and
accessing configuration data from the TOML configuration file.
"""

# Main configuration interface
from .manager import clear_config_cache, get_config, set_config_path

# For advanced usage - direct access to the loader and validators
from .loader import load_main_config
from .validators import (
    validate_app_config,
    validate_logging_config,
    validate_tool_config,
)

__all__ = [
    # Main interface
    "get_config",
    "set_config_path",
    "clear_config_cache",
    # Advanced interface
    "load_main_config",
    "validate_app_config",
    "validate_logging_config",
    "validate_tool_config",
]
