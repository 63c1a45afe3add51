"""
Validation functions for configuration values and command-line arguments.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, List, Optional, Union

from .exceptions import ValidationError

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Toolchain versions as Gradle accepts them: "17", "21", "1.8".
_TOOLCHAIN_VERSION_PATTERN = re.compile(r"^\d+(\.\d+)*$")


def validate_enum_choice(
    value: Any,
    valid_choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Args:
        value: Value to validate
        valid_choices: List of valid choices
        field_name: Name of the field being validated
        case_sensitive: Whether comparison should be case sensitive

    Returns:
        The matching choice, as spelled in valid_choices

    Raises:
        ValidationError: If value is not in valid choices
    """
    str_value = str(value)
    if case_sensitive:
        if str_value in valid_choices:
            return str_value
    else:
        for choice in valid_choices:
            if choice.lower() == str_value.lower():
                return choice

    raise ValidationError(
        f"{field_name} must be one of {valid_choices}, got '{value}'",
        field_name=field_name,
        value=value
    )


def validate_bool(value: Any, field_name: str = "value") -> bool:
    """
    Validate that a value is a boolean.

    TOML already produces real booleans, so strings such as "true" are
    rejected rather than guessed at.
    """
    if not isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be true or false, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate that a value is a positive float.

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
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
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


def validate_path_exists(path: Union[str, Path], field_name: str = "path") -> str:
    """
    Validate that a path exists.

    Args:
        path: Path to validate
        field_name: Name of the field being validated

    Returns:
        Validated path string

    Raises:
        ValidationError: If path doesn't exist
    """
    path_str = str(path)
    if not os.path.exists(path_str):
        raise ValidationError(
            f"{field_name} does not exist: {path_str}",
            field_name=field_name,
            value=path_str
        )
    return path_str


def validate_toolchain_version(version: Any, field_name: str = "toolchain_version") -> str:
    """
    Validate a requested Java toolchain version such as "17" or "1.8".

    An empty string means no toolchain was requested and is returned as-is.
    """
    str_value = "" if version is None else str(version).strip()
    if str_value and not _TOOLCHAIN_VERSION_PATTERN.match(str_value):
        raise ValidationError(
            f"{field_name} must look like '17' or '1.8', got '{version}'",
            field_name=field_name,
            value=version
        )
    return str_value


def validate_log_level(level: Any, field_name: str = "log_level") -> int:
    """Validate a log level name and return its numeric value."""
    name = validate_enum_choice(level, _LOG_LEVELS, field_name=field_name, case_sensitive=False)
    return logging.getLevelName(name)
