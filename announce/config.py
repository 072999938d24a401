"""Configuration settings for the announce service"""
import os
import logging
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_settings import BaseSettings
from typing import Optional, Dict, Any

from announce.errors import ConfigurationError

logger = logging.getLogger(__name__)


class AnnounceConfig(BaseModel):
    """
    Immutable announce configuration.

    Built once from Settings when the announce service is constructed.
    Ports <= 0 mean "not served" and are left out of the descriptor.
    """
    discovery_hosts: str
    discovery_port: int
    environment: str
    pool: str
    host_ip: str = "127.0.0.1"
    external_host: str = ""
    telnet_port: int = 0
    http_port: int = 0
    https_port: int = 0
    period: int = 5
    timeout: float = 10.0
    service_type: str = "reporting"

    model_config = ConfigDict(frozen=True)

    @field_validator("period")
    @classmethod
    def _positive_period(cls, value: int) -> int:
        if value <= 0:
            raise ValueError(f"announce period must be positive, got {value}")
        return value

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError(f"announce timeout must be positive, got {value}")
        return value


class Settings(BaseSettings):
    """
    Application settings.

    Priority (highest to lowest):
    1. Environment variables
    2. Config server values (loaded at startup)
    3. Default values
    """

    # Service Identity
    SERVICE_NAME: str = "announce"
    SERVICE_PORT: int = 8080

    # Discovery registry
    # DISCOVERY_HOSTS is a comma-separated list, tried in order on every tick
    ANNOUNCE_ENABLED: bool = True
    DISCOVERY_HOSTS: str = "localhost"
    DISCOVERY_PORT: int = 8080
    ENVIRONMENT: str = "development"
    POOL: str = "general"
    SERVICE_TYPE: str = "reporting"

    # Announced endpoints (0 disables an endpoint)
    HOST_IP: str = "127.0.0.1"
    EXTERNAL_HOST: str = ""
    TELNET_PORT: int = 4242
    HTTP_PORT: int = 8080
    HTTPS_PORT: int = 0

    # Scheduling
    ANNOUNCE_PERIOD: int = 5  # seconds between announcements
    ANNOUNCE_TIMEOUT: float = 10.0  # per-request timeout

    # Config Server
    # Profile determines which config to fetch: announce/default, announce/prod, ...
    CLOUD_CONFIG_SERVER: str = "localhost"
    CONFIG_SERVER_PORT: int = 8888
    CONFIG_SERVER_ENABLED: bool = False
    SPRING_PROFILES_ACTIVE: str = "default"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    def apply_config_server_values(self, config: Dict[str, Any]):
        """
        Apply values from config server.

        Config server provides:
        - announce.discovery.hosts -> DISCOVERY_HOSTS
        - announce.discovery.port -> DISCOVERY_PORT
        - announce.environment -> ENVIRONMENT
        - announce.pool -> POOL
        - announce.period -> ANNOUNCE_PERIOD
        """
        if not config:
            return

        mappings = {
            ("discovery", "hosts"): "DISCOVERY_HOSTS",
            ("discovery", "port"): "DISCOVERY_PORT",
            ("environment",): "ENVIRONMENT",
            ("pool",): "POOL",
            ("period",): "ANNOUNCE_PERIOD",
        }

        for keys, attr in mappings.items():
            value = config
            try:
                for key in keys:
                    value = value[key]
            except (KeyError, TypeError):
                continue

            # Environment always wins over the config server
            if os.getenv(attr):
                continue

            current = getattr(self, attr)
            if isinstance(current, int) and not isinstance(value, int):
                try:
                    value = int(value)
                except (TypeError, ValueError) as e:
                    raise ConfigurationError(
                        f"Config server value for {attr} is not an integer: {value!r}"
                    ) from e
            setattr(self, attr, value)
            logger.info(f"Applied config server value for {attr}")

    def to_announce_config(self) -> AnnounceConfig:
        """Freeze the announce-related settings into an AnnounceConfig"""
        try:
            return AnnounceConfig(
                discovery_hosts=self.DISCOVERY_HOSTS,
                discovery_port=self.DISCOVERY_PORT,
                environment=self.ENVIRONMENT,
                pool=self.POOL,
                host_ip=self.HOST_IP,
                external_host=self.EXTERNAL_HOST,
                telnet_port=self.TELNET_PORT,
                http_port=self.HTTP_PORT,
                https_port=self.HTTPS_PORT,
                period=self.ANNOUNCE_PERIOD,
                timeout=self.ANNOUNCE_TIMEOUT,
                service_type=self.SERVICE_TYPE,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid announce configuration: {e}") from e


# Global settings instance
settings = Settings()


async def initialize_settings(target: Optional[Settings] = None) -> Settings:
    """
    Initialize settings from config server.

    Should be called during application startup.
    """
    from announce.services.config_server import initialize_config_from_server

    target = target or settings

    if target.CONFIG_SERVER_ENABLED:
        config = await initialize_config_from_server(target)
        target.apply_config_server_values(config)

    logger.info(f"Service: {target.SERVICE_NAME}")
    logger.info(f"Discovery hosts: {target.DISCOVERY_HOSTS} (port {target.DISCOVERY_PORT})")
    logger.info(f"Environment: {target.ENVIRONMENT}, pool: {target.POOL}")
    logger.info(
        f"Announced ports: http={target.HTTP_PORT}, https={target.HTTPS_PORT}, "
        f"telnet={target.TELNET_PORT}"
    )
    logger.info(f"Announce period: {target.ANNOUNCE_PERIOD}s")
    return target
