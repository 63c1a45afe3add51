"""
Applies the conventions to a build.

ConventionsRunner decides which conventions apply to a build, the way a build
system plugin does at settings time: non-OSS builds opt out of publishing,
build scans can be switched off, anonymous publication keeps the ecosystem's
defaults, and a requested toolchain version replaces the running JDK in the
JDK tag. Background build scan configuration is completed before the outcome
is returned.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional

from ..capabilities import RecordingBuildCache, RecordingBuildScan, RecordingDevelocity
from ..conventions import (
    AuthenticatedPublishing,
    BuildCacheConventions,
    BuildScanConventions,
    EcosystemDefaultPublishing,
    RuntimeJdkVersion,
    ToolchainJdkVersion,
)
from ..models import ConventionsConfig, Environment
from ..system import ProcessRunner, SubprocessProcessRunner

logger = logging.getLogger(__name__)


def contains_properties_task(tasks: Iterable[str]) -> bool:
    """True if the build only asks for properties, which should not produce a scan."""
    return any(task == "properties" or task.endswith(":properties") for task in tasks)


@dataclass
class ConventionsOutcome:
    """What applying the conventions configured."""

    develocity: RecordingDevelocity
    build_scan: RecordingBuildScan
    build_cache: RecordingBuildCache
    build_scan_conventions_applied: bool = False
    build_cache_conventions_applied: bool = False
    skipped_reasons: list = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "server": self.develocity.get_server(),
            "build_scan_conventions_applied": self.build_scan_conventions_applied,
            "build_cache_conventions_applied": self.build_cache_conventions_applied,
            "skipped": list(self.skipped_reasons),
            "build_scan": self.build_scan.to_dict(),
            "build_cache": self.build_cache.to_dict(),
        }


class ConventionsRunner:
    """
    Decides which conventions apply and applies them.
    """

    def __init__(
        self,
        config: ConventionsConfig,
        process_runner: Optional[ProcessRunner] = None,
        env: Optional[Mapping] = None,
    ):
        self.config = config
        self.process_runner = process_runner or SubprocessProcessRunner(
            config.project_dir, timeout=config.probe_timeout_seconds
        )
        self.env = env if env is not None else Environment.from_os()

    def apply(self, tasks: Iterable[str] = ()) -> ConventionsOutcome:
        """
        Apply the conventions for a build that runs ``tasks``.

        Returns:
            The recorded outcome, with all background configuration completed.
        """
        tasks = list(tasks)
        outcome = ConventionsOutcome(
            develocity=RecordingDevelocity(),
            build_scan=RecordingBuildScan(),
            build_cache=RecordingBuildCache(),
        )

        if not self.config.is_oss_build:
            outcome.build_scan.disable_publishing()
            outcome.skipped_reasons.append(f"build type '{self.config.build_type}' is not OSS")
            logger.info(f"Build type '{self.config.build_type}' is not OSS, conventions not applied")
            return outcome

        if not self.config.build_scan_enabled:
            outcome.skipped_reasons.append("build scans are disabled")
        elif contains_properties_task(tasks):
            outcome.skipped_reasons.append("build only runs a properties task")
        else:
            self._build_scan_conventions().execute(outcome.develocity, outcome.build_scan)
            outcome.build_scan.run_background_tasks()
            outcome.build_scan_conventions_applied = True

        if self.config.build_cache_enabled:
            BuildCacheConventions(self.env).execute(outcome.build_cache)
            outcome.build_cache_conventions_applied = True
        else:
            outcome.skipped_reasons.append("the build cache is disabled")

        for reason in outcome.skipped_reasons:
            logger.info(f"Skipped: {reason}")
        return outcome

    def _build_scan_conventions(self) -> BuildScanConventions:
        if self.config.anonymous_publication:
            publishing = EcosystemDefaultPublishing()
        else:
            publishing = AuthenticatedPublishing()
        jdk_version = ToolchainJdkVersion(self.config.toolchain_version, RuntimeJdkVersion(self.env))
        return BuildScanConventions(
            self.process_runner,
            self.env,
            publishing=publishing,
            jdk_version=jdk_version,
        )
