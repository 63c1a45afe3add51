"""
Build environment classification for the develocity_conventions package.

This module detects which CI provider, if any, is running the build.
"""

from .continuous_integration import ContinuousIntegration, detect

__all__ = [
    "ContinuousIntegration",
    "detect",
]
