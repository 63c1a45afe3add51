"""
Orchestration of the convention engines for a single build.
"""

from .runner import ConventionsOutcome, ConventionsRunner, contains_properties_task

__all__ = [
    "ConventionsOutcome",
    "ConventionsRunner",
    "contains_properties_task",
]
