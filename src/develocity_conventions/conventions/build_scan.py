"""
Build scan conventions.

This module applies the standard build scan policy: IP address obfuscation,
publication, tagging, git/docker/CI metadata and upload behaviour. Every
external probe degrades to "no data" when it fails, so applying the
conventions never fails a build.
"""

import logging
import platform
from typing import Mapping, Optional
from urllib.parse import quote_plus

from ..capabilities import ConfigurableBuildScan, ConfigurableDevelocity
from ..classification import ContinuousIntegration, detect
from ..models import Environment
from ..system import ProcessRunner, RunResult, run
from .publishing import (
    AuthenticatedPublishing,
    JdkVersionProvider,
    PublishingPolicy,
    RuntimeJdkVersion,
)

logger = logging.getLogger(__name__)

OBFUSCATED_IP_ADDRESS = "0.0.0.0"

GIT_COMMIT_LABEL = "Git commit"

# platform.system() names that differ from the JVM's os.name
_OS_NAMES = {"Darwin": "Mac OS X"}


def operating_system_name() -> str:
    system = platform.system()
    return _OS_NAMES.get(system, system)


def create_search_url(name: str, value: str) -> str:
    """Path and query of a scan search for custom value ``name`` = ``value``."""
    return f"/scans?search.names={quote_plus(name, encoding='utf-8')}&search.values={quote_plus(value, encoding='utf-8')}"


class BuildScanConventions:
    """
    Applies the conventions to a build scan.

    The engine holds no state beyond its injected environment, process runner
    and policies, so one instance may be executed any number of times.
    """

    def __init__(
        self,
        process_runner: ProcessRunner,
        env: Optional[Mapping] = None,
        publishing: Optional[PublishingPolicy] = None,
        jdk_version: Optional[JdkVersionProvider] = None,
    ):
        """
        Args:
            process_runner: Runs the git and docker probes.
            env: Environment variables of the build. Defaults to a snapshot
                of the current process environment.
            publishing: Publication policy. Defaults to publishing to the
                default server when authenticated.
            jdk_version: Source of the version in the JDK tag. Defaults to the
                JDK found at ``JAVA_HOME``.
        """
        self.process_runner = process_runner
        self.env = env if env is not None else Environment.from_os()
        self.publishing = publishing or AuthenticatedPublishing()
        self.jdk_version = jdk_version or RuntimeJdkVersion(self.env)

    def execute(self, develocity: ConfigurableDevelocity, build_scan: ConfigurableBuildScan) -> None:
        """
        Apply the conventions to ``develocity`` and ``build_scan``.

        Args:
            develocity: Develocity server configuration to be configured
            build_scan: Build scan to be configured
        """
        build_scan.obfuscation(
            lambda obfuscation: obfuscation.ip_addresses(
                lambda addresses: [OBFUSCATED_IP_ADDRESS for _ in addresses]
            )
        )
        self.publishing.configure(develocity, build_scan)
        ci = detect(self.env)
        self._tag_build_scan(build_scan, ci)
        build_scan.background(lambda backgrounded: self._add_git_metadata(develocity, backgrounded))
        build_scan.background(self._add_docker_metadata)
        build_scan.background(self._add_docker_compose_metadata)
        self._add_ci_metadata(build_scan, ci)
        build_scan.upload_in_background(ci is None)
        build_scan.capture_input_files(True)
        logger.info(f"Applied build scan conventions ({ci or 'local build'})")

    def _tag_build_scan(self, build_scan: ConfigurableBuildScan, ci: Optional[ContinuousIntegration]) -> None:
        build_scan.tag("CI" if ci is not None else "Local")
        build_scan.tag(f"JDK-{self.jdk_version.get_jdk_version()}")
        build_scan.tag(operating_system_name())

    def _add_git_metadata(self, develocity: ConfigurableDevelocity, build_scan: ConfigurableBuildScan) -> None:
        def record_commit(commit_id: str) -> None:
            build_scan.value(GIT_COMMIT_LABEL, commit_id)
            server = develocity.get_server()
            if server is not None:
                build_scan.link("Git commit build scans", server + create_search_url(GIT_COMMIT_LABEL, commit_id))

        def record_branch(branch: str) -> None:
            build_scan.tag(branch)
            build_scan.value("Git branch", branch)

        def record_status(status: str) -> None:
            build_scan.tag("dirty")
            build_scan.value("Git status", status)

        self._run("git", "rev-parse", "--short=8", "--verify", "HEAD").standard_out(record_commit)
        self._get_branch().standard_out(record_branch)
        self._run("git", "status", "--porcelain").standard_out(record_status)

    def _add_docker_metadata(self, build_scan: ConfigurableBuildScan) -> None:
        self._run("docker", "--version").standard_out(
            lambda version: build_scan.value("Docker", version)
        )

    def _add_docker_compose_metadata(self, build_scan: ConfigurableBuildScan) -> None:
        self._run("docker", "compose", "version").standard_out(
            lambda version: build_scan.value("Docker Compose", version)
        )

    def _add_ci_metadata(self, build_scan: ConfigurableBuildScan, ci: Optional[ContinuousIntegration]) -> None:
        if ci is None:
            return
        build_url = ci.build_url_from(self.env)
        if build_url:
            build_scan.link("CI build", build_url)
        build_scan.value("CI provider", str(ci))

    def _get_branch(self) -> RunResult:
        branch = self.env.get("BRANCH")
        if branch is not None:
            return RunResult.of(branch)
        return self._run("git", "rev-parse", "--abbrev-ref", "HEAD")

    def _run(self, *command_line) -> RunResult:
        return run(self.process_runner, *command_line)
