"""One announcement pass over the registry endpoints"""
from typing import Iterable, List

from announce.discovery.announcer import Announcer
from announce.discovery.descriptor import DescriptorBuilder
from announce.discovery.models import TickMessage, TickOutcome


async def run_tick(
    builder: DescriptorBuilder,
    announcer: Announcer,
    endpoints: Iterable[str],
) -> TickOutcome:
    """
    Announce to the first endpoint that accepts.

    Endpoints are tried in order, each at most once. The first 202 ends the
    pass; endpoints after it are not contacted. Every failed attempt leaves
    a warning in the outcome, the successful one an info message.
    """
    descriptor = builder.build()
    messages: List[TickMessage] = []

    for endpoint in endpoints:
        result = await announcer.register_at(endpoint, descriptor)

        if result.succeeded:
            messages.append(TickMessage.info(f"Announce to {endpoint} succeeded"))
            return TickOutcome(success=True, messages=tuple(messages), endpoint=endpoint)

        if result.error is not None:
            messages.append(TickMessage.warning(
                f"Announce to {endpoint} failed: {result.error!r}",
                cause=result.error,
            ))
        else:
            messages.append(TickMessage.warning(
                f"Announce to {endpoint} failed with status {result.status_code}"
            ))

    return TickOutcome(success=False, messages=tuple(messages))
