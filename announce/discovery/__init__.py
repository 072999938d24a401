"""Discovery registry announcement package"""
from announce.discovery.announcer import Announcer
from announce.discovery.descriptor import DescriptorBuilder
from announce.discovery.endpoints import RegistryEndpointSet
from announce.discovery.failover import run_tick
from announce.discovery.models import (
    Identity,
    ServiceDescriptor,
    TickMessage,
    TickOutcome,
)
from announce.discovery.service import AnnounceService
from announce.discovery.state import AnnounceStateTracker

__all__ = [
    "Announcer",
    "AnnounceService",
    "AnnounceStateTracker",
    "DescriptorBuilder",
    "Identity",
    "RegistryEndpointSet",
    "ServiceDescriptor",
    "TickMessage",
    "TickOutcome",
    "run_tick",
]
