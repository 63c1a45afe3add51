"""
Read-only view over the environment variables the conventions consult.
"""

import os
from collections.abc import Mapping
from types import MappingProxyType
from typing import Iterator, Optional


class Environment(Mapping):
    """
    Immutable, string-keyed environment snapshot.

    Lookups are exact and case-sensitive. A key that is present with an empty
    or ``None`` value still counts as present, which is what CI detection relies
    on: Concourse only exports ``CI`` and its value carries no meaning.
    """

    def __init__(self, variables: Optional[Mapping] = None):
        self._variables = MappingProxyType(dict(variables or {}))

    @classmethod
    def from_os(cls) -> "Environment":
        """Snapshot the current process environment."""
        return cls(os.environ)

    def __getitem__(self, name: str) -> Optional[str]:
        return self._variables[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    def __repr__(self) -> str:
        return f"Environment({len(self._variables)} variables)"
