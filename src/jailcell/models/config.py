"""
Configuration data models.

This module contains the configuration structures loaded from `config.toml`.
"""

from dataclasses import dataclass, field


@dataclass
class ToolConfig:
    """
    How to reach the jailhouse tool, loaded from the `[jailhouse]` section.
    """

    # Name on PATH or absolute path of the jailhouse binary.
    binary: str = "jailhouse"
    # Seconds to wait for any single tool invocation.
    command_timeout: float = 10.0
    # Forward the caller's environment to the tool.
    pass_environment: bool = True


@dataclass
class LoggingConfig:
    """
    Logging settings, loaded from the `[logging]` section.
    """

    level: str = "INFO"


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    tool: ToolConfig = field(default_factory=ToolConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
