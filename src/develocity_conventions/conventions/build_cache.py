"""
Build cache conventions.

Local and remote caches are always enabled. Only CI builds with an access key
may push to the remote cache, so developer machines never populate it.
"""

import logging
from typing import Mapping, Optional

from ..capabilities import ConfigurableBuildCache, RemoteBuildCache
from ..classification import detect
from ..models import Environment
from .publishing import DEFAULT_SERVER

logger = logging.getLogger(__name__)

_CACHE_PATH_SUFFIXES = ("/cache/", "/cache")


def server_of_cache_url(cache_url: Optional[str]) -> Optional[str]:
    """Strip the ``/cache`` path from a legacy cache URL.

    Returns None when there is no URL or it does not end in ``/cache``.

    Examples:
        >>> server_of_cache_url("https://ge.example.com/cache/")
        'https://ge.example.com'
    """
    if cache_url is not None:
        for suffix in _CACHE_PATH_SUFFIXES:
            if cache_url.endswith(suffix):
                return cache_url[:-len(suffix)]
    return None


class BuildCacheConventions:
    """Applies the conventions to a build cache."""

    def __init__(self, env: Optional[Mapping] = None):
        self.env = env if env is not None else Environment.from_os()

    def execute(self, build_cache: ConfigurableBuildCache) -> None:
        """
        Apply the conventions to ``build_cache``.

        Args:
            build_cache: Build cache to be configured
        """
        build_cache.local(lambda local: local.enable())
        build_cache.remote(self._configure_remote)

    def _configure_remote(self, remote: RemoteBuildCache) -> None:
        remote.enable()
        server = self.resolve_server()
        remote.set_server(server)
        push = bool(self.resolve_access_key()) and detect(self.env) is not None
        if push:
            remote.enable_push()
        logger.info(f"Remote build cache at {server}, push {'enabled' if push else 'disabled'}")

    def resolve_server(self) -> str:
        """The remote cache server, by order of precedence of its sources."""
        server = self.env.get("DEVELOCITY_CACHE_SERVER")
        if server is None:
            server = server_of_cache_url(self.env.get("GRADLE_ENTERPRISE_CACHE_URL"))
            if server is None:
                server = DEFAULT_SERVER
        return server

    def resolve_access_key(self) -> Optional[str]:
        access_key = self.env.get("DEVELOCITY_ACCESS_KEY")
        if access_key is None:
            access_key = self.env.get("GRADLE_ENTERPRISE_ACCESS_KEY")
        return access_key
