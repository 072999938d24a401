"""Ordered set of discovery registry endpoints"""
import httpx
from typing import Iterator, Tuple

from announce.errors import ConfigurationError

SCHEME = "http"


class RegistryEndpointSet:
    """
    Registry base URLs in failover priority order.

    Built once from a comma-separated host list and one shared port.
    Order matches the host list and never changes.
    """

    def __init__(self, urls: Tuple[str, ...]):
        if not urls:
            raise ConfigurationError("Discovery host list is empty")
        self._urls = tuple(urls)

    @classmethod
    def from_config(cls, hosts: str, port: int) -> "RegistryEndpointSet":
        if isinstance(port, bool) or not isinstance(port, int) or port <= 0:
            raise ConfigurationError(f"Invalid discovery port: {port!r}")

        names = [h.strip() for h in (hosts or "").split(",")]
        names = [h for h in names if h]
        if not names:
            raise ConfigurationError(f"Discovery host list is empty: {hosts!r}")

        return cls(tuple(cls._base_url(host, port) for host in names))

    @staticmethod
    def _base_url(host: str, port: int) -> str:
        """Build http://<host>:<port>, rejecting hosts that are not a bare host name or IP."""
        raw = f"{SCHEME}://{host}:{port}"
        try:
            url = httpx.URL(raw)
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"Invalid discovery host {host!r}: {e}") from e

        # "a/b", "user@a" or "a?x" parse, but not into host a on our port.
        # httpx reports the default port 80 as None.
        if (
            not url.host
            or (url.port or 80) != port
            or url.path not in ("", "/")
            or url.query
            or url.fragment
            or url.userinfo
        ):
            raise ConfigurationError(f"Invalid discovery host {host!r}")
        return raw

    @property
    def urls(self) -> Tuple[str, ...]:
        return self._urls

    def __iter__(self) -> Iterator[str]:
        return iter(self._urls)

    def __len__(self) -> int:
        return len(self._urls)

    def __repr__(self) -> str:
        return f"RegistryEndpointSet({list(self._urls)!r})"
