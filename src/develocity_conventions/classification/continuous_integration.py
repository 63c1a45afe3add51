"""
Continuous integration provider detection.

This module classifies a build's environment against a fixed catalogue of CI
systems and derives the URL of the CI build that is running it.
"""

import logging
from enum import Enum
from typing import Callable, Mapping, Optional

logger = logging.getLogger(__name__)

BuildUrlFunction = Callable[[Mapping], Optional[str]]


def _or_null(value: Optional[str]) -> str:
    # Missing inputs are rendered the way string concatenation on the JVM does.
    return "null" if value is None else value


def _github_actions_build_url(env: Mapping) -> str:
    server = env.get("GITHUB_SERVER_URL")
    repository = env.get("GITHUB_REPOSITORY")
    run_id = env.get("GITHUB_RUN_ID")
    return f"{_or_null(server)}/{_or_null(repository)}/actions/runs/{_or_null(run_id)}"


class ContinuousIntegration(Enum):
    """
    The known CI providers, in detection order.

    Each member carries its display name, the environment variable whose
    presence signals the provider, and a function deriving the build URL.
    """

    BAMBOO = ("Bamboo", "bamboo_resultsUrl", None)
    CIRCLE_CI = ("CircleCI", "CIRCLE_BUILD_URL", None)
    GITHUB_ACTIONS = ("GitHub Actions", "GITHUB_ACTIONS", _github_actions_build_url)
    JENKINS = ("Jenkins", "JENKINS_URL", lambda env: env.get("BUILD_URL"))
    CONCOURSE = ("Concourse", "CI", lambda env: None)

    def __init__(self, display_name: str, environment_variable: str,
                 build_url: Optional[BuildUrlFunction]):
        self.display_name = display_name
        self.environment_variable = environment_variable
        # Without an explicit rule, the detection variable holds the build URL.
        self._build_url = build_url or (lambda env: env.get(environment_variable))

    def build_url_from(self, env: Mapping) -> Optional[str]:
        """Derive the URL of the running CI build from ``env``, if possible."""
        return self._build_url(env)

    def __str__(self) -> str:
        return self.display_name


def detect(env: Mapping) -> Optional[ContinuousIntegration]:
    """Detect the CI provider running the build.

    Providers are checked in catalogue order and the first whose detection
    variable is present wins, whatever its value. Nested CI systems are not
    merged.

    Args:
        env: Environment variables of the build.

    Returns:
        The detected provider, or None for a local build.
    """
    for ci in ContinuousIntegration:
        if ci.environment_variable in env:
            logger.debug(f"Detected CI provider {ci} from {ci.environment_variable}")
            return ci
    return None
