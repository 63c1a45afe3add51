"""
Build-system-agnostic capabilities that the convention engines write to.

Each supported build system provides adapters implementing these abstract
classes; the engines never depend on a particular build system.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

IpAddressTransform = Callable[[List[str]], List[str]]


class ConfigurableDevelocity(ABC):
    """The Develocity server configuration of the build."""

    @abstractmethod
    def get_server(self) -> Optional[str]:
        pass

    @abstractmethod
    def set_server(self, server: str) -> None:
        pass


class ObfuscationConfigurer(ABC):
    """Configures obfuscation of sensitive data captured in a build scan."""

    @abstractmethod
    def ip_addresses(self, transform: IpAddressTransform) -> None:
        """
        Install a transform applied to the IP addresses captured in the scan.

        Args:
            transform: Maps the captured addresses to the addresses to publish.
        """
        pass


class ConfigurableBuildScan(ABC):
    """
    A build scan that conventions can be applied to.
    """

    @abstractmethod
    def capture_input_files(self, capture: bool) -> None:
        """
        Configure whether input files of Gradle tasks or Maven goals are captured.
        """
        pass

    @abstractmethod
    def obfuscation(self, configurer: Callable[[ObfuscationConfigurer], None]) -> None:
        pass

    @abstractmethod
    def publish_if_authenticated(self) -> None:
        """Publish the scan only when the build is authenticated with the server."""
        pass

    @abstractmethod
    def upload_in_background(self, enabled: bool) -> None:
        pass

    @abstractmethod
    def link(self, name: str, url: str) -> None:
        pass

    @abstractmethod
    def tag(self, tag: str) -> None:
        pass

    @abstractmethod
    def value(self, name: str, value: str) -> None:
        pass

    @abstractmethod
    def background(self, configurer: Callable[["ConfigurableBuildScan"], None]) -> None:
        """
        Defer ``configurer`` until later in the build.

        Implementations may run it on another thread, but must complete it
        before the build scan is published.
        """
        pass


class LocalBuildCache(ABC):
    """Configuration of the local build cache."""

    @abstractmethod
    def enable(self) -> None:
        pass


class RemoteBuildCache(ABC):
    """Configuration of the remote build cache."""

    @abstractmethod
    def enable(self) -> None:
        pass

    @abstractmethod
    def enable_push(self) -> None:
        """Allow the build to store entries in the remote cache."""
        pass

    @abstractmethod
    def set_server(self, server: str) -> None:
        pass


class ConfigurableBuildCache(ABC):
    """A build cache that conventions can be applied to."""

    @abstractmethod
    def local(self, configurer: Callable[[LocalBuildCache], None]) -> None:
        pass

    @abstractmethod
    def remote(self, configurer: Callable[[RemoteBuildCache], None]) -> None:
        pass
