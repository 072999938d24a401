"""Periodic announcement to the discovery registry"""
import asyncio
import httpx
import logging
from typing import Optional, Dict, Any

from announce.config import AnnounceConfig, Settings
from announce.discovery.announcer import Announcer
from announce.discovery.descriptor import DescriptorBuilder
from announce.discovery.endpoints import RegistryEndpointSet
from announce.discovery.failover import run_tick
from announce.discovery.models import Identity, TickMessage, TickOutcome, TickStats
from announce.discovery.state import AnnounceStateTracker

logger = logging.getLogger(__name__)


class AnnounceService:
    """
    Keeps this process announced at the discovery registry.

    Lifecycle:
        service = AnnounceService(config)
        await service.start()   # first announcement fires immediately
        ...
        await service.stop()    # stops ticking, then withdraws everywhere

    Ticks run one at a time on a single asyncio task, every `period`
    seconds measured start to start. A tick that overruns the period is
    followed immediately by the next one; ticks never overlap.
    """

    def __init__(
        self,
        config: AnnounceConfig,
        identity: Optional[Identity] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.identity = identity or Identity.generate()
        self.builder = DescriptorBuilder(config, self.identity)
        self.tracker = AnnounceStateTracker()
        self.stats = TickStats()
        self.endpoints: Optional[RegistryEndpointSet] = None

        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._announcer: Optional[Announcer] = None
        self._task: Optional[asyncio.Task] = None
        self._stop_event: Optional[asyncio.Event] = None
        self._tick_lock: Optional[asyncio.Lock] = None

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "AnnounceService":
        return cls(settings.to_announce_config(), **kwargs)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """
        Begin announcing.

        Returns as soon as the announce task is scheduled.

        Raises:
            ConfigurationError: If the discovery host list or port is invalid
        """
        if self._task is not None:
            logger.warning("Announce service already started")
            return

        self.endpoints = RegistryEndpointSet.from_config(
            self.config.discovery_hosts, self.config.discovery_port
        )
        self._client = httpx.AsyncClient(transport=self._transport)
        self._announcer = Announcer(self.identity, self._client, timeout=self.config.timeout)
        self._stop_event = asyncio.Event()
        self._tick_lock = asyncio.Lock()
        self._task = asyncio.create_task(self._run(), name="announce")

        logger.info(
            f"Announcing node {self.identity.node_id} to {list(self.endpoints)} "
            f"every {self.config.period}s"
        )

    async def tick(self) -> TickOutcome:
        """
        Run one announcement pass and hand its outcome to the state tracker.

        Only valid after start(). Concurrent calls run one after the other.
        """
        async with self._tick_lock:
            return await self._tick()

    async def _tick(self) -> TickOutcome:
        try:
            outcome = await run_tick(self.builder, self._announcer, self.endpoints)
        except Exception as e:
            outcome = TickOutcome(
                success=False,
                messages=(TickMessage.warning(f"Announce failed: {e!r}", cause=e),),
            )

        self.tracker.record(outcome, logger)

        self.stats.ticks += 1
        if outcome.success:
            self.stats.successes += 1
            self.stats.last_endpoint = outcome.endpoint
        else:
            self.stats.failures += 1
        return outcome

    async def _run(self):
        loop = asyncio.get_running_loop()
        next_tick = loop.time()

        while not self._stop_event.is_set():
            await self.tick()

            next_tick += self.config.period
            delay = next_tick - loop.time()
            if delay < 0:
                # Overran the period; restart the schedule from now
                next_tick = loop.time()
                delay = 0

            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
            except asyncio.TimeoutError:
                pass

    async def stop(self) -> None:
        """
        Stop announcing and withdraw from every registry endpoint.

        An in-flight tick is allowed to finish first. Never raises; failures
        are logged.
        """
        if self._task is None:
            return

        try:
            self._stop_event.set()
            await asyncio.wait({self._task})
            if not self._task.cancelled() and self._task.exception() is not None:
                logger.warning(
                    "Announce task ended with an error",
                    exc_info=self._task.exception(),
                )
            self._task = None

            for result in await self._announcer.withdraw_all(self.endpoints):
                if result.error is not None:
                    logger.warning(
                        f"Failed to de-announce from {result.endpoint}: {result.error!r}",
                        exc_info=result.error,
                    )
                else:
                    logger.info(f"De-announce from {result.endpoint} status: {result.status_code}")
        except Exception as e:
            logger.warning(f"Error while stopping announce service: {e}", exc_info=True)
        finally:
            self._task = None
            if self._client is not None:
                try:
                    await self._client.aclose()
                except Exception as e:
                    logger.warning(f"Failed to close HTTP client: {e}")
                self._client = None

    def status(self) -> Dict[str, Any]:
        """Snapshot for the status endpoint"""
        return {
            "nodeId": self.identity.node_id,
            "announcementId": self.identity.announcement_id,
            "running": self.running,
            "announced": self.tracker.announced,
            "endpoints": list(self.endpoints) if self.endpoints else [],
            "period": self.config.period,
            "ticks": self.stats.ticks,
            "successes": self.stats.successes,
            "failures": self.stats.failures,
            "lastEndpoint": self.stats.last_endpoint,
        }
