"""Response models for the announce status endpoint"""
from pydantic import BaseModel
from typing import Optional, List


class AnnounceStatus(BaseModel):
    """Current announcement state of this node"""
    nodeId: str
    announcementId: str
    running: bool
    announced: bool
    endpoints: List[str] = []
    period: int
    ticks: int = 0
    successes: int = 0
    failures: int = 0
    lastEndpoint: Optional[str] = None
