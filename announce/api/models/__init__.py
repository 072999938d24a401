"""API models package"""
from announce.api.models.status import AnnounceStatus

__all__ = ["AnnounceStatus"]
