"""Service descriptor assembly"""
from typing import Dict

from announce.config import AnnounceConfig
from announce.discovery.models import Identity, ServiceDescriptor, ServiceEntry


class DescriptorBuilder:
    """
    Builds the announcement descriptor from configuration and identity.

    A fresh descriptor is built for every announcement attempt. Endpoints
    whose port is <= 0 are left out entirely.
    """

    def __init__(self, config: AnnounceConfig, identity: Identity):
        self.config = config
        self.identity = identity

    def properties(self) -> Dict[str, str]:
        cfg = self.config
        props: Dict[str, str] = {}
        if cfg.http_port > 0:
            props["http"] = f"http://{cfg.host_ip}:{cfg.http_port}"
            if cfg.external_host:
                props["http-external"] = f"http://{cfg.external_host}:{cfg.http_port}"
        if cfg.https_port > 0:
            props["https"] = f"https://{cfg.host_ip}:{cfg.https_port}"
        if cfg.telnet_port > 0:
            props["telnet"] = f"{cfg.host_ip}:{cfg.telnet_port}"
        return props

    def build(self) -> ServiceDescriptor:
        return ServiceDescriptor(
            environment=self.config.environment,
            pool=self.config.pool,
            location=f"/{self.identity.node_id}",
            services=(
                ServiceEntry(
                    id=self.identity.announcement_id,
                    type=self.config.service_type,
                    properties=self.properties(),
                ),
            ),
        )
