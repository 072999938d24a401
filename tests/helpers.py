"""Test doubles and helpers shared by the announce tests."""
import asyncio
from typing import Callable, Dict, List, Optional, Union

import httpx

Reply = Union[int, type]


class FakeRegistry:
    """Discovery registry replicas served through httpx.MockTransport.

    Replies are looked up per (method, host). A reply is a status code, an
    httpx exception class to raise, or a list of either consumed in order
    (the last entry repeats). Unconfigured PUTs answer 202 and unconfigured
    DELETEs answer 200.
    """

    def __init__(self, replies: Optional[Dict[tuple, Union[Reply, List[Reply]]]] = None):
        self.replies = dict(replies or {})
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.host)
        default = 202 if request.method == "PUT" else 200
        reply = self.replies.get(key, default)
        if isinstance(reply, list):
            reply = reply.pop(0) if len(reply) > 1 else reply[0]
        if isinstance(reply, type) and issubclass(reply, httpx.RequestError):
            raise reply("registry unreachable", request=request)
        return httpx.Response(reply)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def hosts(self, method: str) -> List[str]:
        return [r.url.host for r in self.requests if r.method == method]


async def wait_until(predicate: Callable[[], bool], timeout: float = 2.0):
    """Yield to the event loop until predicate() holds or the timeout expires."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.01)
