"""
Validation and error handling for the jailcell package.

This module provides the exception taxonomy shared by the parser, cache
and control layers, along with input validation helpers used by the
configuration loader and the CLI.
"""

# Core exception classes and error handling
from .exceptions import (
    CellNotFoundError,
    ErrorSeverity,
    JailcellError,
    ParseError,
    ToolInvocationError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_parse_error,
    handle_subprocess_error,
)

# Validation functions
from .validators import (
    MAX_CELL_NAME_LENGTH,
    validate_cell_id,
    validate_cell_name,
    validate_enum_choice,
    validate_executable,
    validate_load_address,
    validate_positive_float,
    validate_positive_integer,
)

__all__ = [
    # Exceptions
    "CellNotFoundError",
    "ErrorSeverity",
    "JailcellError",
    "ParseError",
    "ToolInvocationError",
    "ValidationError",
    # Error handling
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    "handle_parse_error",
    "handle_subprocess_error",
    # Validators
    "MAX_CELL_NAME_LENGTH",
    "validate_cell_id",
    "validate_cell_name",
    "validate_enum_choice",
    "validate_executable",
    "validate_load_address",
    "validate_positive_float",
    "validate_positive_integer",
]
