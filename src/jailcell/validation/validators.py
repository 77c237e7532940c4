"""
Validation functions for configuration values and command-line input.
"""

import os
import re
from pathlib import Path
from typing import Any, List, Optional, Union

from .exceptions import ValidationError

# Width of the name column in `jailhouse cell list` output.
MAX_CELL_NAME_LENGTH = 24


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is an integer within the given bounds.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate that a value is a float within the given bounds.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_enum_choice(
    value: Any,
    choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Returns the matching entry of ``choices`` (original case).

    Raises:
        ValidationError: If value is not in choices
    """
    str_value = str(value)

    if case_sensitive:
        if str_value not in choices:
            raise ValidationError(
                f"{field_name} must be one of {choices}, got {value}",
                field_name=field_name,
                value=value
            )
        return str_value

    lower_choices = [choice.lower() for choice in choices]
    lower_value = str_value.lower()
    if lower_value not in lower_choices:
        raise ValidationError(
            f"{field_name} must be one of {choices}, got {value}",
            field_name=field_name,
            value=value
        )
    return choices[lower_choices.index(lower_value)]


def validate_executable(path: Union[str, Path], field_name: str = "binary") -> str:
    """
    Validate that a path names an existing, executable regular file.

    Args:
        path: Path to validate
        field_name: Name of the field being validated

    Returns:
        Validated path string

    Raises:
        ValidationError: If the path does not exist or cannot be executed
    """
    path_str = str(path)
    if not os.path.isfile(path_str):
        raise ValidationError(
            f"{field_name} does not exist: {path_str}",
            field_name=field_name,
            value=path_str
        )
    if not os.access(path_str, os.X_OK):
        raise ValidationError(
            f"{field_name} is not executable: {path_str}",
            field_name=field_name,
            value=path_str
        )
    return path_str


def validate_cell_name(name: str, field_name: str = "cell_name") -> str:
    """
    Validate a cell name as the jailhouse tool would list it.

    Names are non-empty, contain no whitespace and fit in the 24-character
    name column.
    """
    if not name or not isinstance(name, str):
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=name
        )

    if re.search(r'\s', name):
        raise ValidationError(
            f"{field_name} must not contain whitespace: {name!r}",
            field_name=field_name,
            value=name
        )

    if len(name) > MAX_CELL_NAME_LENGTH:
        raise ValidationError(
            f"{field_name} must be at most {MAX_CELL_NAME_LENGTH} characters, got {len(name)}",
            field_name=field_name,
            value=name
        )

    return name


def validate_cell_id(value: Any, field_name: str = "cell_id") -> int:
    """Validate a numeric cell slot id."""
    return validate_positive_integer(value, min_value=0, field_name=field_name)


def validate_load_address(value: Any, field_name: str = "address") -> str:
    """
    Validate a load address for ``cell load``.

    Accepts decimal or ``0x``-prefixed hexadecimal and returns it in the
    form the tool expects (hex, lower case).
    """
    if isinstance(value, int) and not isinstance(value, bool):
        int_value = value
    else:
        try:
            int_value = int(str(value).strip(), 0)
        except ValueError:
            raise ValidationError(
                f"{field_name} must be a decimal or 0x-prefixed hex number, got {value}",
                field_name=field_name,
                value=value
            )
    if int_value < 0:
        raise ValidationError(
            f"{field_name} must be >= 0, got {int_value}",
            field_name=field_name,
            value=value
        )
    return hex(int_value)
