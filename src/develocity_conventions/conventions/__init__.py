"""
Convention engines for build scans and build caches.
"""

from .build_cache import BuildCacheConventions, server_of_cache_url
from .build_scan import (
    GIT_COMMIT_LABEL,
    OBFUSCATED_IP_ADDRESS,
    BuildScanConventions,
    create_search_url,
    operating_system_name,
)
from .publishing import (
    DEFAULT_SERVER,
    AuthenticatedPublishing,
    EcosystemDefaultPublishing,
    JdkVersionProvider,
    PublishingPolicy,
    RuntimeJdkVersion,
    ToolchainJdkVersion,
    specification_version,
)

__all__ = [
    # Engines
    "BuildCacheConventions",
    "BuildScanConventions",
    # Policies
    "AuthenticatedPublishing",
    "EcosystemDefaultPublishing",
    "JdkVersionProvider",
    "PublishingPolicy",
    "RuntimeJdkVersion",
    "ToolchainJdkVersion",
    # Helpers and constants
    "DEFAULT_SERVER",
    "GIT_COMMIT_LABEL",
    "OBFUSCATED_IP_ADDRESS",
    "create_search_url",
    "operating_system_name",
    "server_of_cache_url",
    "specification_version",
]
