"""Pytest configuration and shared fixtures for announce tests."""
from typing import Callable

import pytest

from announce.config import AnnounceConfig
from announce.discovery.models import Identity


@pytest.fixture
def identity() -> Identity:
    return Identity(announcement_id="ann-0001", node_id="node-0001")


@pytest.fixture
def make_config() -> Callable[..., AnnounceConfig]:
    """Factory for AnnounceConfig with three registry hosts a, b, c on port 100."""
    def _make(**overrides) -> AnnounceConfig:
        values = dict(
            discovery_hosts="a,b,c",
            discovery_port=100,
            environment="test",
            pool="general",
            host_ip="10.0.0.5",
            telnet_port=4242,
            http_port=8080,
            https_port=0,
            period=3600,
            timeout=1.0,
        )
        values.update(overrides)
        return AnnounceConfig(**values)
    return _make
