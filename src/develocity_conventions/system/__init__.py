"""
System interaction for the convention probes.

This module provides the process-runner contract consumed by the convention
engines together with a subprocess-backed implementation, so that probing git
and docker degrades to "no data" instead of failing the build.
"""

from .commands import (
    ProcessRunner,
    ProcessSpec,
    RunFailedException,
    RunResult,
    SubprocessProcessRunner,
    run,
)

__all__ = [
    "ProcessRunner",
    "ProcessSpec",
    "RunFailedException",
    "RunResult",
    "SubprocessProcessRunner",
    "run",
]
