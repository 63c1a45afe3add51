"""
Policies that build scan conventions delegate to.

Publishing decides where and when scans are published; the JDK version
provider decides which Java version the scan's JDK tag reports.
"""

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Mapping, Optional

from ..capabilities import ConfigurableBuildScan, ConfigurableDevelocity

logger = logging.getLogger(__name__)

DEFAULT_SERVER = "https://ge.spring.io"

UNKNOWN_JDK_VERSION = "unknown"

_JAVA_VERSION_PATTERN = re.compile(r'^JAVA_VERSION="?([^"\s]+)"?\s*$', re.MULTILINE)


class PublishingPolicy(ABC):
    """Configures publication of the build scan."""

    @abstractmethod
    def configure(self, develocity: ConfigurableDevelocity, build_scan: ConfigurableBuildScan) -> None:
        pass


class AuthenticatedPublishing(PublishingPolicy):
    """Publish scans to the default server, and only when authenticated."""

    def __init__(self, server: str = DEFAULT_SERVER):
        self.server = server

    def configure(self, develocity: ConfigurableDevelocity, build_scan: ConfigurableBuildScan) -> None:
        build_scan.publish_if_authenticated()
        develocity.set_server(self.server)


class EcosystemDefaultPublishing(PublishingPolicy):
    """Leave publication to the build system's defaults, e.g. anonymous scans."""

    def configure(self, develocity: ConfigurableDevelocity, build_scan: ConfigurableBuildScan) -> None:
        pass


class JdkVersionProvider(ABC):
    """Supplies the Java version reported in the scan's JDK tag."""

    @abstractmethod
    def get_jdk_version(self) -> str:
        pass


def specification_version(java_version: str) -> str:
    """Reduce a full Java version to its specification version.

    Examples:
        >>> specification_version("17.0.2")
        '17'
        >>> specification_version("1.8.0_292")
        '1.8'
    """
    if java_version.startswith("1."):
        return ".".join(java_version.split(".")[:2])
    return re.split(r"[.+\-_]", java_version, maxsplit=1)[0]


class RuntimeJdkVersion(JdkVersionProvider):
    """
    The specification version of the JDK the build runs on.

    The JDK is located through ``JAVA_HOME`` and its version read from the
    ``release`` file every JDK ships.
    """

    def __init__(self, env: Mapping):
        self.env = env

    def get_jdk_version(self) -> str:
        java_home = self.env.get("JAVA_HOME")
        if not java_home:
            return UNKNOWN_JDK_VERSION
        release_file = Path(java_home) / "release"
        try:
            content = release_file.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug(f"Could not read JDK release file {release_file}: {e}")
            return UNKNOWN_JDK_VERSION
        match = _JAVA_VERSION_PATTERN.search(content)
        if match is None:
            return UNKNOWN_JDK_VERSION
        return specification_version(match.group(1))


class ToolchainJdkVersion(JdkVersionProvider):
    """The requested toolchain version, falling back to another provider."""

    def __init__(self, requested: Optional[str], fallback: JdkVersionProvider):
        self.requested = requested
        self.fallback = fallback

    def get_jdk_version(self) -> str:
        if self.requested:
            return self.requested
        return self.fallback.get_jdk_version()
