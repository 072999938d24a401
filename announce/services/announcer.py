"""Discovery registry announcement for the host application"""
import logging
from typing import Optional

from announce.config import Settings
from announce.discovery.service import AnnounceService

logger = logging.getLogger(__name__)


async def start_announcing(settings: Settings, **kwargs) -> Optional[AnnounceService]:
    """
    Build the announce service from settings and start it.

    Returns None when announcing is disabled. Configuration errors propagate
    and abort startup.
    """
    if not settings.ANNOUNCE_ENABLED:
        logger.info("Discovery announcement disabled")
        return None

    service = AnnounceService.from_settings(settings, **kwargs)
    await service.start()
    return service


async def stop_announcing(service: Optional[AnnounceService]):
    """Stop announcing and withdraw from every registry endpoint"""
    if service is None:
        return
    await service.stop()
    logger.info("Withdrawn from discovery registry")
