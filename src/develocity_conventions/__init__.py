"""
Develocity conventions: organization-wide build scan and build cache policy.

This package applies a standard policy to the build scans and build caches of
builds run under Gradle or Maven. The convention engines detect the execution
environment (CI provider, git state, docker versions), derive tags, values and
links for the build scan, and decide how the build cache is used. Any probe
that fails simply contributes no data.

The package is organized into specialized modules:
- capabilities: Build-system-agnostic interfaces the engines configure
- classification: CI provider detection
- conventions: The build scan and build cache convention engines
- system: Process execution for git and docker probes
- orchestration: Decides which conventions apply to a build
- config: Configuration management and validation
- validation: Input validation and error handling
- cli: Command-line interface

Usage:
    From command line:
        develocity-conventions --json build

    Programmatically:
        from develocity_conventions import BuildScanConventions, SubprocessProcessRunner
        BuildScanConventions(SubprocessProcessRunner()).execute(develocity, build_scan)
"""

from .capabilities import (
    ConfigurableBuildCache,
    ConfigurableBuildScan,
    ConfigurableDevelocity,
    RecordingBuildCache,
    RecordingBuildScan,
    RecordingDevelocity,
)
from .classification import ContinuousIntegration, detect
from .config import clear_config_cache, get_config, set_config_path
from .conventions import (
    AuthenticatedPublishing,
    BuildCacheConventions,
    BuildScanConventions,
    EcosystemDefaultPublishing,
    RuntimeJdkVersion,
    ToolchainJdkVersion,
)
from .models import ConventionsConfig, Environment
from .orchestration import ConventionsOutcome, ConventionsRunner
from .system import ProcessRunner, RunFailedException, SubprocessProcessRunner
from .validation import ValidationError
from .cli import main_cli

__version__ = "0.1.0"

__all__ = [
    # Engines
    "BuildCacheConventions",
    "BuildScanConventions",
    # Policies
    "AuthenticatedPublishing",
    "EcosystemDefaultPublishing",
    "RuntimeJdkVersion",
    "ToolchainJdkVersion",
    # Capabilities
    "ConfigurableBuildCache",
    "ConfigurableBuildScan",
    "ConfigurableDevelocity",
    "RecordingBuildCache",
    "RecordingBuildScan",
    "RecordingDevelocity",
    # CI detection
    "ContinuousIntegration",
    "detect",
    # Process execution
    "ProcessRunner",
    "RunFailedException",
    "SubprocessProcessRunner",
    # Configuration and orchestration
    "ConventionsConfig",
    "ConventionsOutcome",
    "ConventionsRunner",
    "Environment",
    "ValidationError",
    "clear_config_cache",
    "get_config",
    "set_config_path",
    "main_cli",
]
