"""HTTP calls against a discovery registry"""
import httpx
import json
import logging
from typing import Iterable, List

from announce.discovery.models import (
    Identity,
    RegisterResult,
    ServiceDescriptor,
    WithdrawResult,
)

logger = logging.getLogger(__name__)

ANNOUNCEMENT_PATH = "/v1/announcement/"

# The registry answers 202 Accepted for a stored announcement. Nothing else,
# not even 200/201/204, counts as announced.
ACCEPTED = 202

# InvalidURL and StreamError are not HTTPError subclasses
REQUEST_ERRORS = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError)


class Announcer:
    """
    Publishes and withdraws this node's announcement at a single registry endpoint.

    Transport and encoding errors are returned in the result, never raised.
    """

    def __init__(self, identity: Identity, client: httpx.AsyncClient, timeout: float = 10.0):
        self.identity = identity
        self.client = client
        self.timeout = timeout

    def announcement_url(self, endpoint: str) -> str:
        return f"{endpoint.rstrip('/')}{ANNOUNCEMENT_PATH}{self.identity.node_id}"

    async def register_at(self, endpoint: str, descriptor: ServiceDescriptor) -> RegisterResult:
        """PUT the descriptor at the endpoint. Succeeds only on 202."""
        try:
            body = json.dumps(descriptor.to_wire())
        except (TypeError, ValueError) as e:
            return RegisterResult(succeeded=False, error=e)

        try:
            response = await self.client.put(
                self.announcement_url(endpoint),
                content=body,
                headers={
                    "User-Agent": self.identity.node_id,
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        except REQUEST_ERRORS as e:
            return RegisterResult(succeeded=False, error=e)

        return RegisterResult(
            succeeded=response.status_code == ACCEPTED,
            status_code=response.status_code,
        )

    async def withdraw_at(self, endpoint: str) -> WithdrawResult:
        """DELETE the announcement at the endpoint. Best effort."""
        try:
            response = await self.client.delete(
                self.announcement_url(endpoint),
                headers={"User-Agent": self.identity.node_id},
                timeout=self.timeout,
            )
        except REQUEST_ERRORS as e:
            return WithdrawResult(endpoint=endpoint, error=e)
        return WithdrawResult(endpoint=endpoint, status_code=response.status_code)

    async def withdraw_all(self, endpoints: Iterable[str]) -> List[WithdrawResult]:
        """Withdraw from every endpoint in order, whatever the individual results."""
        results = []
        for endpoint in endpoints:
            try:
                result = await self.withdraw_at(endpoint)
            except Exception as e:
                result = WithdrawResult(endpoint=endpoint, error=e)
            results.append(result)
        return results
