"""
Pytest configuration and shared fixtures for the develocity_conventions test suite.

This module provides common fixtures, a scriptable process runner and
configuration helpers for all test modules.
"""

import shutil
import sys
import tempfile
from pathlib import Path
from typing import Dict, List, Tuple

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from develocity_conventions.capabilities import (  # noqa: E402
    RecordingBuildCache,
    RecordingBuildScan,
    RecordingDevelocity,
)
from develocity_conventions.system import (  # noqa: E402
    ProcessRunner,
    ProcessSpec,
    RunFailedException,
)


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# ============================================================================
# Test Doubles
# ============================================================================


class ScriptedProcessRunner(ProcessRunner):
    """
    ProcessRunner that answers command lines from a script.

    Command lines in ``outputs`` write their output; command lines in
    ``failures`` raise RunFailedException; anything else prints nothing.
    """

    def __init__(self):
        self.outputs: Dict[Tuple[str, ...], str] = {}
        self.failures: Dict[Tuple[str, ...], Exception] = {}
        self.commands: List[Tuple[str, ...]] = []

    def run(self, configurer):
        spec = ProcessSpec()
        configurer(spec)
        command = tuple(spec.command)
        self.commands.append(command)
        if command in self.failures:
            raise RunFailedException(str(self.failures[command])) from self.failures[command]
        output = self.outputs.get(command)
        if output is not None and spec.output is not None:
            spec.output.write(output)


class ExplodingProcessRunner(ProcessRunner):
    """ProcessRunner for builds where no external tool is installed."""

    def run(self, configurer):
        spec = ProcessSpec()
        configurer(spec)
        raise RunFailedException(f"Command not found: {spec.command[0]}") from FileNotFoundError(spec.command[0])


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def process_runner():
    return ScriptedProcessRunner()


@pytest.fixture
def develocity():
    return RecordingDevelocity()


@pytest.fixture
def build_scan():
    return RecordingBuildScan()


@pytest.fixture
def build_cache():
    return RecordingBuildCache()


@pytest.fixture
def git_repository_outputs():
    """Probe outputs of a clean checkout of main with docker installed."""
    return {
        ("git", "rev-parse", "--short=8", "--verify", "HEAD"): "79ce52f8\n",
        ("git", "rev-parse", "--abbrev-ref", "HEAD"): "main\n",
        ("git", "status", "--porcelain"): "",
        ("docker", "--version"): "Docker version 20.10.24, build 297e128\n",
        ("docker", "compose", "version"): "Docker Compose version v2.17.2\n",
    }


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def sample_config_data():
    """Sample configuration data for testing."""
    return {
        "conventions": {"build_type": "oss"},
        "build_scan": {
            "enabled": True,
            "anonymous_publication": False,
            "toolchain_version": "17",
        },
        "build_cache": {"enabled": True},
        "general": {"log_level": "DEBUG", "probe_timeout_seconds": 10.0},
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Write the sample configuration to a temporary config.toml."""
    import toml

    config_path = temp_dir / "config.toml"
    with open(config_path, "w") as f:
        toml.dump(sample_config_data, f)
    return config_path


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    from develocity_conventions.config import manager

    original_config_path = manager._DEFAULT_CONFIG_FILE_PATH

    yield

    from develocity_conventions.config import clear_config_cache, set_config_path

    clear_config_cache()
    set_config_path(original_config_path)
