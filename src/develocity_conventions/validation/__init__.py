"""
Validation and error handling for the develocity_conventions package.

This module provides input validation and error handling with consistent
error reporting across the configuration layer and the command line.
"""

from .exceptions import (
    ErrorSeverity,
    ValidationError,
    handle_error,
    handle_config_error,
    handle_cli_error,
)

from .validators import (
    validate_bool,
    validate_enum_choice,
    validate_log_level,
    validate_path_exists,
    validate_positive_float,
    validate_toolchain_version,
)

__all__ = [
    # Core functionality
    "ErrorSeverity",
    "ValidationError",
    "handle_error",
    "handle_config_error",
    "handle_cli_error",
    # Validators
    "validate_bool",
    "validate_enum_choice",
    "validate_log_level",
    "validate_path_exists",
    "validate_positive_float",
    "validate_toolchain_version",
]
