"""Announce status route"""
from fastapi import APIRouter, HTTPException
from typing import Optional

from announce.api.models.status import AnnounceStatus
from announce.discovery.service import AnnounceService

router = APIRouter()

# Global announce service instance (set in main.py lifespan)
_announce_service: Optional[AnnounceService] = None


def get_announce_service() -> Optional[AnnounceService]:
    """Get the announce service instance"""
    return _announce_service


def set_announce_service(service: Optional[AnnounceService]):
    """Set the announce service instance (called from main.py)"""
    global _announce_service
    _announce_service = service


@router.get("/status", response_model=AnnounceStatus)
async def announce_status() -> AnnounceStatus:
    """
    Announcement state of this node.

    Reports the node identity, the registry endpoints in failover order,
    whether the last tick was accepted, and tick counters.
    """
    service = get_announce_service()
    if service is None:
        raise HTTPException(status_code=503, detail="Announcing is disabled")
    return AnnounceStatus(**service.status())
