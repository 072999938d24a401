"""Spring Cloud Config Server integration"""
import httpx
import logging
from typing import Optional, Dict, Any, TYPE_CHECKING

if TYPE_CHECKING:
    from announce.config import Settings

logger = logging.getLogger(__name__)

APPLICATION_NAME = "announce"


class ConfigServerClient:
    """
    Client for Spring Cloud Config Server.

    Fetches configuration from the config server at startup.
    Config server endpoint: http://{host}:{port}/{application}/{profile}
    """

    def __init__(
        self,
        url: str = "http://localhost:8888",
        application: str = APPLICATION_NAME,
        profile: str = "default",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url.rstrip("/")
        self.application = application
        self.profile = profile
        self._transport = transport
        self._config: Dict[str, Any] = {}

    async def fetch_config(self) -> Dict[str, Any]:
        """
        Fetch configuration from config server.

        Returns the '<application>.*' properties as a nested dict, e.g.
        "announce.discovery.hosts" becomes {"discovery": {"hosts": ...}}.
        Earlier property sources take precedence over later ones.
        """
        config_url = f"{self.url}/{self.application}/{self.profile}"
        logger.info(f"Fetching config from: {config_url} (profile: {self.profile})")

        try:
            async with httpx.AsyncClient(timeout=10.0, transport=self._transport) as client:
                response = await client.get(config_url)

                if response.status_code != 200:
                    logger.warning(
                        f"Config server returned {response.status_code}. "
                        "Using environment variables."
                    )
                    return {}

                data = response.json()
        except httpx.RequestError as e:
            logger.warning(f"Could not connect to config server: {e}")
            return {}
        except ValueError as e:
            logger.warning(f"Config server returned invalid JSON: {e}")
            return {}

        config: Dict[str, Any] = {}
        prefix = f"{self.application}."
        # Reverse so the first (highest priority) source is applied last
        for prop_source in reversed(data.get("propertySources", [])):
            source = prop_source.get("source", {})
            for key, value in source.items():
                if key.startswith(prefix):
                    self._set_nested(config, key[len(prefix):].split("."), value)

        self._config = config
        logger.info(f"Loaded config from server: {list(config.keys())}")
        return config

    def _set_nested(self, d: dict, keys: list, value):
        """Set a nested dictionary value from a list of keys"""
        for key in keys[:-1]:
            existing = d.get(key)
            if not isinstance(existing, dict):
                existing = d[key] = {}
            d = existing
        d[keys[-1]] = value

    def get(self, key: str, default=None):
        """Get a config value using dot notation (e.g., 'discovery.hosts')"""
        value = self._config
        try:
            for part in key.split("."):
                value = value[part]
            return value
        except (KeyError, TypeError):
            return default


# Global config client instance
_config_client: Optional[ConfigServerClient] = None


async def initialize_config_from_server(settings: "Settings") -> Dict[str, Any]:
    """
    Initialize configuration from config server.

    Uses CLOUD_CONFIG_SERVER (hostname) and CONFIG_SERVER_PORT to build URL.
    Uses SPRING_PROFILES_ACTIVE for the profile (matches Java services convention).

    Called during application startup.
    """
    global _config_client

    if not settings.CONFIG_SERVER_ENABLED:
        logger.info("Config server disabled, using environment variables")
        return {}

    _config_client = ConfigServerClient(
        url=f"http://{settings.CLOUD_CONFIG_SERVER}:{settings.CONFIG_SERVER_PORT}",
        application=APPLICATION_NAME,
        profile=settings.SPRING_PROFILES_ACTIVE,
    )

    return await _config_client.fetch_config()


def get_config_client() -> Optional[ConfigServerClient]:
    """Get the config client instance"""
    return _config_client
