"""
Capabilities the convention engines configure.

The abstract classes describe what the engines may configure on a build scan,
a build cache and the Develocity server; the recording implementations keep
the result in memory.
"""

from .base import (
    ConfigurableBuildCache,
    ConfigurableBuildScan,
    ConfigurableDevelocity,
    IpAddressTransform,
    LocalBuildCache,
    ObfuscationConfigurer,
    RemoteBuildCache,
)
from .recording import (
    LocalCacheSettings,
    RecordingBuildCache,
    RecordingBuildScan,
    RecordingDevelocity,
    RemoteCacheSettings,
)

__all__ = [
    # Interfaces
    "ConfigurableBuildCache",
    "ConfigurableBuildScan",
    "ConfigurableDevelocity",
    "IpAddressTransform",
    "LocalBuildCache",
    "ObfuscationConfigurer",
    "RemoteBuildCache",
    # In-memory implementations
    "LocalCacheSettings",
    "RecordingBuildCache",
    "RecordingBuildScan",
    "RecordingDevelocity",
    "RemoteCacheSettings",
]
