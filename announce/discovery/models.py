"""Data model for discovery announcements"""
import logging
import uuid
from dataclasses import dataclass
from typing import Optional, Dict, Any, Tuple
from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class Identity:
    """
    Process identity used for every announcement.

    announcement_id is the service id inside the descriptor; node_id is the
    registration path segment and the User-Agent of every request.
    """
    announcement_id: str
    node_id: str

    @classmethod
    def generate(cls) -> "Identity":
        return cls(announcement_id=str(uuid.uuid4()), node_id=str(uuid.uuid4()))


class ServiceEntry(BaseModel):
    """A single announced service"""
    id: str
    type: str
    properties: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class ServiceDescriptor(BaseModel):
    """Announcement body published to the discovery registry"""
    environment: str
    pool: str
    location: str
    services: Tuple[ServiceEntry, ...] = ()

    model_config = ConfigDict(frozen=True)

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready dict in the registry's announcement format"""
        return {
            "environment": self.environment,
            "pool": self.pool,
            "location": self.location,
            "services": [
                {"id": s.id, "type": s.type, "properties": dict(s.properties)}
                for s in self.services
            ],
        }


@dataclass(frozen=True)
class TickMessage:
    """A log message produced while announcing, replayed only if the tick is logged"""
    level: int
    text: str
    cause: Optional[BaseException] = None

    @classmethod
    def info(cls, text: str) -> "TickMessage":
        return cls(logging.INFO, text)

    @classmethod
    def warning(cls, text: str, cause: Optional[BaseException] = None) -> "TickMessage":
        return cls(logging.WARNING, text, cause)


@dataclass(frozen=True)
class TickOutcome:
    """Result of one pass over the registry endpoints"""
    success: bool
    messages: Tuple[TickMessage, ...] = ()
    endpoint: Optional[str] = None  # endpoint that accepted the announcement


@dataclass(frozen=True)
class RegisterResult:
    """Outcome of a single registration attempt"""
    succeeded: bool
    status_code: Optional[int] = None
    error: Optional[BaseException] = None


@dataclass(frozen=True)
class WithdrawResult:
    """Outcome of a single withdrawal attempt"""
    endpoint: str
    status_code: Optional[int] = None
    error: Optional[BaseException] = None


@dataclass
class TickStats:
    """Counters exposed on the status endpoint"""
    ticks: int = 0
    successes: int = 0
    failures: int = 0
    last_endpoint: Optional[str] = None
