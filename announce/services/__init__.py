"""Services package"""
from announce.services.announcer import start_announcing, stop_announcing
from announce.services.config_server import initialize_config_from_server, get_config_client

__all__ = [
    "start_announcing",
    "stop_announcing",
    "initialize_config_from_server",
    "get_config_client"
]
