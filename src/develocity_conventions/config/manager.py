"""
Configuration management and singleton pattern.

This module provides the main configuration loading and management interface,
implementing a singleton pattern to ensure configuration is loaded only once.
"""

import logging
from pathlib import Path
from typing import Optional

from ..models.config import ConventionsConfig
from ..validation import handle_config_error, ErrorSeverity
from .loader import load_main_config
from .validators import validate_conventions_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

_CONFIG: Optional[ConventionsConfig] = None

# Default configuration file, relative to the repository root. A missing default
# file means built-in defaults; a path set with set_config_path() must exist.
_DEFAULT_CONFIG_FILE_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"
_CONFIG_FILE_PATH = _DEFAULT_CONFIG_FILE_PATH
_CONFIG_PATH_EXPLICIT = False


def set_config_path(config_path: Path) -> None:
    """
    Set a custom configuration file path.

    Args:
        config_path: Path to the config.toml file

    Note:
        Clears any cached configuration so the next get_config() reloads.
    """
    global _CONFIG_FILE_PATH, _CONFIG, _CONFIG_PATH_EXPLICIT
    _CONFIG_FILE_PATH = config_path
    _CONFIG_PATH_EXPLICIT = config_path != _DEFAULT_CONFIG_FILE_PATH
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    """
    Clear the cached configuration, forcing a reload on next access.
    """
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def _load_config(config_path: Path) -> ConventionsConfig:
    """
    Load and validate the configuration file.

    Raises:
        FileNotFoundError: If an explicitly configured file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the file is malformed
    """
    if not config_path.exists() and not _CONFIG_PATH_EXPLICIT:
        logger.info(f"No configuration file at {config_path}, using defaults")
        return ConventionsConfig()

    try:
        config_data = load_main_config(config_path)
        config = validate_conventions_config(config_data, config_dir=config_path.parent)
        logger.info(
            f"Successfully loaded configuration (build scans: {config.build_scan_enabled}, "
            f"build cache: {config.build_cache_enabled})"
        )
        return config

    except FileNotFoundError as e:
        handle_config_error(
            error=e,
            context="loading configuration file",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise
    except Exception as e:
        handle_config_error(
            error=e,
            context="processing configuration",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def get_config() -> ConventionsConfig:
    """
    Get the global configuration, loading it if necessary.

    Returns:
        The singleton ConventionsConfig instance

    Raises:
        FileNotFoundError: If an explicitly configured file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the file is malformed
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(_CONFIG_FILE_PATH)
    return _CONFIG


def is_config_loaded() -> bool:
    """
    Check if configuration has been loaded and cached.
    """
    return _CONFIG is not None


def get_config_info() -> dict:
    """
    Get information about the current configuration state.

    Returns:
        Dictionary with configuration metadata
    """
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(_CONFIG_FILE_PATH),
        "build_type": _CONFIG.build_type if _CONFIG else None,
        "build_scan_enabled": _CONFIG.build_scan_enabled if _CONFIG else None,
        "build_cache_enabled": _CONFIG.build_cache_enabled if _CONFIG else None,
    }
