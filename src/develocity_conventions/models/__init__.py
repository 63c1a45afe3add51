"""
Data models for the conventions.

Configuration Models:
- Settings that decide which conventions apply and how

Runtime Models:
- The read-only environment snapshot handed to the convention engines
"""

from .config import OSS_BUILD_TYPE, ConventionsConfig
from .environment import Environment

__all__ = [
    # Configuration
    "ConventionsConfig",
    "OSS_BUILD_TYPE",
    # Runtime
    "Environment",
]
