"""
In-memory implementations of the capabilities.

These adapters record everything the convention engines configure so that
the outcome can be reported by the command line or asserted on in tests.
Background configurers are run on a thread pool and joined before the
recorded outcome is read.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional, Set

from ..validation import ErrorSeverity, handle_error
from .base import (
    ConfigurableBuildCache,
    ConfigurableBuildScan,
    ConfigurableDevelocity,
    IpAddressTransform,
    LocalBuildCache,
    ObfuscationConfigurer,
    RemoteBuildCache,
)

logger = logging.getLogger(__name__)


class RecordingDevelocity(ConfigurableDevelocity):
    """Holds the Develocity server in memory."""

    def __init__(self, server: Optional[str] = None):
        self.server = server

    def get_server(self) -> Optional[str]:
        return self.server

    def set_server(self, server: str) -> None:
        self.server = server


class _RecordingObfuscation(ObfuscationConfigurer):

    def __init__(self, build_scan: "RecordingBuildScan"):
        self._build_scan = build_scan

    def ip_addresses(self, transform: IpAddressTransform) -> None:
        self._build_scan.ip_address_obfuscator = transform


class RecordingBuildScan(ConfigurableBuildScan):
    """
    Build scan that records tags, values, links and settings.

    Writes are lock-protected so background configurers may run concurrently.
    """

    def __init__(self, thread_name_prefix: str = "BuildScanBackground"):
        self.thread_name_prefix = thread_name_prefix
        self.tags: Set[str] = set()
        self.values: Dict[str, str] = {}
        self.links: Dict[str, str] = {}
        self.capture_input_files_enabled: bool = False
        self.upload_in_background_enabled: bool = True
        self.publish_if_authenticated_enabled: bool = False
        # Set by collaborators for builds whose scans must never be published.
        self.publishing_disabled: bool = False
        self.ip_address_obfuscator: Optional[IpAddressTransform] = None
        self._pending: List[Callable[[ConfigurableBuildScan], None]] = []
        self._lock = threading.Lock()

    def capture_input_files(self, capture: bool) -> None:
        self.capture_input_files_enabled = capture

    def obfuscation(self, configurer: Callable[[ObfuscationConfigurer], None]) -> None:
        configurer(_RecordingObfuscation(self))

    def publish_if_authenticated(self) -> None:
        self.publish_if_authenticated_enabled = True

    def upload_in_background(self, enabled: bool) -> None:
        self.upload_in_background_enabled = enabled

    def link(self, name: str, url: str) -> None:
        with self._lock:
            self.links[name] = url

    def tag(self, tag: str) -> None:
        with self._lock:
            self.tags.add(tag)

    def value(self, name: str, value: str) -> None:
        with self._lock:
            self.values[name] = value

    def background(self, configurer: Callable[[ConfigurableBuildScan], None]) -> None:
        with self._lock:
            self._pending.append(configurer)

    def disable_publishing(self) -> None:
        self.publishing_disabled = True

    @property
    def pending_background_tasks(self) -> int:
        with self._lock:
            return len(self._pending)

    def run_background_tasks(self, max_workers: int = 3) -> int:
        """
        Run all queued background configurers and wait for every one of them.

        Args:
            max_workers: Upper bound on concurrently running configurers.

        Returns:
            The number of configurers that were run.

        Raises:
            Exception: The first error raised by a configurer, once all
                configurers have finished.
        """
        with self._lock:
            pending, self._pending = self._pending, []
        if not pending:
            return 0

        logger.debug(f"Running {len(pending)} background build scan configurers")
        with ThreadPoolExecutor(
            max_workers=min(max_workers, len(pending)),
            thread_name_prefix=self.thread_name_prefix,
        ) as executor:
            futures: List[Future] = [executor.submit(configurer, self) for configurer in pending]
            wait(futures)

        for future in futures:
            error = future.exception()
            if error is not None:
                handle_error(
                    error=error,
                    context="running background build scan configuration",
                    severity=ErrorSeverity.ERROR,
                    reraise=True,
                    logger=logger,
                )
        return len(pending)

    def obfuscate_ip_addresses(self, addresses: List[str]) -> List[str]:
        """Apply the installed IP address transform, if any."""
        if self.ip_address_obfuscator is None:
            return list(addresses)
        return list(self.ip_address_obfuscator(list(addresses)))

    def to_dict(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "tags": sorted(self.tags),
                "values": dict(self.values),
                "links": dict(self.links),
                "capture_input_files": self.capture_input_files_enabled,
                "upload_in_background": self.upload_in_background_enabled,
                "publish_if_authenticated": self.publish_if_authenticated_enabled,
                "publishing_disabled": self.publishing_disabled,
                "ip_addresses_obfuscated": self.ip_address_obfuscator is not None,
            }


@dataclass
class LocalCacheSettings(LocalBuildCache):
    """Recorded settings of the local build cache."""

    enabled: bool = False

    def enable(self) -> None:
        self.enabled = True


@dataclass
class RemoteCacheSettings(RemoteBuildCache):
    """Recorded settings of the remote build cache."""

    enabled: bool = False
    push_enabled: bool = False
    server: Optional[str] = None

    def enable(self) -> None:
        self.enabled = True

    def enable_push(self) -> None:
        self.push_enabled = True

    def set_server(self, server: str) -> None:
        self.server = server


class RecordingBuildCache(ConfigurableBuildCache):
    """Build cache that records the local and remote settings."""

    def __init__(self):
        self.local_settings = LocalCacheSettings()
        self.remote_settings = RemoteCacheSettings()

    def local(self, configurer: Callable[[LocalBuildCache], None]) -> None:
        configurer(self.local_settings)

    def remote(self, configurer: Callable[[RemoteBuildCache], None]) -> None:
        configurer(self.remote_settings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "local": asdict(self.local_settings),
            "remote": asdict(self.remote_settings),
        }
