"""
Configuration validation utilities.

This module turns the raw `[jailhouse]` and `[logging]` tables into
validated configuration objects.
"""

import logging
from typing import Any, Dict

from ..models.config import AppConfig, LoggingConfig, ToolConfig
from ..validation import (
    ValidationError,
    validate_enum_choice,
    validate_positive_float,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def validate_tool_config(tool_data: Dict[str, Any]) -> ToolConfig:
    """
    Validate and create a ToolConfig from the `[jailhouse]` table.

    Raises:
        ValidationError: If validation fails
    """
    defaults = ToolConfig()

    binary = tool_data.get("binary", defaults.binary)
    if not isinstance(binary, str) or not binary.strip():
        raise ValidationError(
            "jailhouse.binary must be a non-empty string",
            field_name="jailhouse.binary",
            value=binary,
        )

    command_timeout = validate_positive_float(
        tool_data.get("command_timeout", defaults.command_timeout),
        min_value=0.1,  # 100ms minimum
        max_value=600.0,  # 10m maximum
        field_name="jailhouse.command_timeout",
    )

    pass_environment = tool_data.get("pass_environment", defaults.pass_environment)
    if not isinstance(pass_environment, bool):
        raise ValidationError(
            "jailhouse.pass_environment must be a boolean",
            field_name="jailhouse.pass_environment",
            value=pass_environment,
        )

    unknown = set(tool_data) - {"binary", "command_timeout", "pass_environment"}
    if unknown:
        logger.warning(f"Ignoring unknown keys in [jailhouse]: {sorted(unknown)}")

    return ToolConfig(
        binary=binary.strip(),
        command_timeout=command_timeout,
        pass_environment=pass_environment,
    )


def validate_logging_config(logging_data: Dict[str, Any]) -> LoggingConfig:
    """
    Validate and create a LoggingConfig from the `[logging]` table.
    """
    level = validate_enum_choice(
        logging_data.get("level", LoggingConfig().level),
        choices=LOG_LEVELS,
        field_name="logging.level",
        case_sensitive=False,
    )
    return LoggingConfig(level=level)


def validate_app_config(config_data: Dict[str, Any]) -> AppConfig:
    """
    Validate a complete parsed config.toml.

    Raises:
        ValidationError: If any section is invalid
    """
    tool_data = config_data.get("jailhouse", {})
    logging_data = config_data.get("logging", {})
    for section, data in (("jailhouse", tool_data), ("logging", logging_data)):
        if not isinstance(data, dict):
            raise ValidationError(
                f"[{section}] must be a table",
                field_name=section,
                value=data,
            )

    return AppConfig(
        tool=validate_tool_config(tool_data),
        logging=validate_logging_config(logging_data),
    )
