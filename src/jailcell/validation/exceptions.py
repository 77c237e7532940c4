"""
Exception taxonomy and error handling helpers.

This module defines the small set of exception types raised by the cell
reconciliation core and the helpers used to log them consistently before
they are propagated to the caller.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, Sequence, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class JailcellError(Exception):
    """Base class for all errors raised by jailcell."""

    def __init__(self, message: str, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.severity = severity


class ValidationError(JailcellError):
    """
    Exception raised when validation of configuration or user input fails.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message, severity=severity)
        self.field_name = field_name
        self.value = value


class ToolInvocationError(JailcellError):
    """
    The jailhouse tool could not be run, exited non-zero, or is not a
    jailhouse binary at all.
    """

    def __init__(self, message: str, command: Optional[Sequence[str]] = None,
                 returncode: Optional[int] = None, stderr: str = "",
                 severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message, severity=severity)
        self.command = list(command) if command else []
        self.returncode = returncode
        self.stderr = stderr


class ParseError(JailcellError):
    """
    A row or field of the tool's output is malformed.

    A single ParseError abandons the whole refresh; the previous snapshot
    stays in place.
    """

    def __init__(self, message: str, line_number: Optional[int] = None,
                 field_name: Optional[str] = None, value: Any = None,
                 severity: ErrorSeverity = ErrorSeverity.ERROR):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message, severity=severity)
        self.line_number = line_number
        self.field_name = field_name
        self.value = value


class CellNotFoundError(JailcellError):
    """A cell that was expected to be listed is no longer present."""

    def __init__(self, key: Any, severity: ErrorSeverity = ErrorSeverity.WARNING):
        super().__init__(f"No cell matches {key!r}", severity=severity)
        self.key = key


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_parse_error(error: Exception, context: str, **kwargs) -> None:
    """Handle errors raised while parsing tool output."""
    handle_error(error, f"parsing {context}", **kwargs)


def handle_subprocess_error(error: Exception, command: str, **kwargs) -> None:
    """Handle subprocess-related errors."""
    handle_error(error, f"subprocess command '{command}'", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Handle CLI-related errors by logging them and exiting."""
    exit_code = kwargs.pop('exit_code', 1)
    include_traceback = kwargs.pop('include_traceback', False)

    severity = kwargs.pop('severity', ErrorSeverity.ERROR)
    if include_traceback and severity == ErrorSeverity.ERROR:
        severity = ErrorSeverity.CRITICAL
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    sys.exit(exit_code)
