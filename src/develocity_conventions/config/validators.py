"""
Configuration validation utilities.

This module turns the raw data of `config.toml` into a validated
ConventionsConfig.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from ..models.config import ConventionsConfig
from ..validation import (
    ValidationError,
    validate_bool,
    validate_log_level,
    validate_path_exists,
    validate_positive_float,
    validate_toolchain_version,
)

logger = logging.getLogger(__name__)

_KNOWN_SECTIONS = {"conventions", "build_scan", "build_cache", "general"}


def validate_conventions_config(config_data: Dict[str, Any], config_dir: Path = Path(".")) -> ConventionsConfig:
    """
    Validate and create a ConventionsConfig from raw configuration data.

    Args:
        config_data: Raw configuration from TOML
        config_dir: Directory of the configuration file, used to resolve a
            relative project_dir

    Returns:
        Validated ConventionsConfig instance

    Raises:
        ValidationError: If validation fails
    """
    unknown_sections = set(config_data) - _KNOWN_SECTIONS
    if unknown_sections:
        logger.warning(f"Ignoring unknown configuration sections: {sorted(unknown_sections)}")

    conventions_settings = config_data.get("conventions", {})
    build_scan_settings = config_data.get("build_scan", {})
    build_cache_settings = config_data.get("build_cache", {})
    general_settings = config_data.get("general", {})

    build_type = conventions_settings.get("build_type")
    if build_type is not None and (not isinstance(build_type, str) or not build_type.strip()):
        raise ValidationError(
            f"conventions.build_type must be a non-empty string, got {build_type!r}",
            field_name="conventions.build_type",
            value=build_type,
        )

    project_dir = general_settings.get("project_dir")
    if project_dir:
        project_path = Path(project_dir)
        if not project_path.is_absolute():
            project_path = config_dir / project_path
        project_dir = Path(validate_path_exists(project_path, field_name="general.project_dir"))
    else:
        project_dir = None

    config = ConventionsConfig(
        build_type=build_type.strip() if build_type else None,
        build_scan_enabled=validate_bool(
            build_scan_settings.get("enabled", True),
            field_name="build_scan.enabled",
        ),
        anonymous_publication=validate_bool(
            build_scan_settings.get("anonymous_publication", False),
            field_name="build_scan.anonymous_publication",
        ),
        toolchain_version=validate_toolchain_version(
            build_scan_settings.get("toolchain_version", ""),
            field_name="build_scan.toolchain_version",
        ),
        build_cache_enabled=validate_bool(
            build_cache_settings.get("enabled", True),
            field_name="build_cache.enabled",
        ),
        log_level=validate_log_level(
            general_settings.get("log_level", "INFO"),
            field_name="general.log_level",
        ),
        project_dir=project_dir,
        probe_timeout_seconds=validate_positive_float(
            general_settings.get("probe_timeout_seconds", 30.0),
            min_value=0.1,
            max_value=600.0,
            field_name="general.probe_timeout_seconds",
        ),
    )

    if not config.is_oss_build:
        logger.info(f"Build type '{config.build_type}' is not OSS; build scans will not be published")
    if config.anonymous_publication and not config.build_scan_enabled:
        logger.warning("build_scan.anonymous_publication has no effect while build scans are disabled")

    return config
