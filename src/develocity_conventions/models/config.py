"""
Configuration data models.

This module contains the configuration structures loaded from `config.toml`.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

OSS_BUILD_TYPE = "oss"


@dataclass
class ConventionsConfig:
    """
    Configuration for applying the conventions, loaded from `config.toml`.
    """

    # [conventions] - the value of the project's `spring.build-type`; None means OSS.
    build_type: Optional[str] = None

    # [build_scan]
    build_scan_enabled: bool = True
    # Anonymous publication uses the ecosystem's own publishing defaults (Gradle's --scan).
    anonymous_publication: bool = False
    # Requested Java toolchain, reported in the JDK tag instead of the running JDK.
    toolchain_version: str = ""

    # [build_cache]
    build_cache_enabled: bool = True

    # [general]
    log_level: int = logging.INFO
    # Directory in which git and docker probes run. None means the current directory.
    project_dir: Optional[Path] = None
    # Seconds a git or docker probe may run before it is killed and treated as absent.
    probe_timeout_seconds: float = 30.0

    @property
    def is_oss_build(self) -> bool:
        """Conventions only apply to OSS builds; any other build type opts out."""
        return self.build_type is None or self.build_type == OSS_BUILD_TYPE
