"""
Connectivity monitor for the shop proxy.

Probes GET /health on a fixed interval. A failed probe is retried a bounded
number of times; after that the monitor waits for the next scheduled tick.
"""

import asyncio
import logging
from contextlib import suppress
from typing import Optional

from src.config import settings
from src.core.connectivity.state import ConnectionState, ConnectionStatus
from src.core.errors import PlatformSwitchError, TransportFailure
from src.integrations.shop_proxy.base import BaseShopProxy
from src.integrations.shop_proxy.schemas import HealthResponse

logger = logging.getLogger(__name__)

NOT_RESPONDING = "API server not responding"


class ConnectivityMonitor:
    """Tracks reachability and the active platform of the shop proxy."""

    def __init__(
        self,
        proxy: BaseShopProxy,
        default_platform: str | None = None,
        interval: float | None = None,
        retry_delay: float | None = None,
        max_retries: int | None = None,
    ):
        self.proxy = proxy
        self.interval = interval if interval is not None else settings.health_check_interval
        self.retry_delay = retry_delay if retry_delay is not None else settings.retry_delay
        self.max_retries = max_retries if max_retries is not None else settings.max_retries

        self.state = ConnectionState(active_platform=default_platform or settings.default_platform)
        self.probe_count = 0

        self._loop_task: Optional[asyncio.Task] = None
        self._retry_task: Optional[asyncio.Task] = None

    @property
    def pending_retry(self) -> Optional[asyncio.Task]:
        """Scheduled retry probe, if any."""
        return self._retry_task

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    # =========================================================================
    # PROBING
    # =========================================================================

    async def probe(self) -> ConnectionState:
        """Run one health probe and update the state."""
        self.probe_count += 1

        try:
            health = await self.proxy.health()
        except TransportFailure as e:
            self._on_probe_failure(str(e))
        else:
            self._on_probe_success(health)

        return self.state

    def _on_probe_success(self, health: HealthResponse) -> None:
        self._cancel_retry()

        was_connected = self.state.connected
        if health.current_platform:
            self.state.active_platform = health.current_platform

        platform = self.state.active_platform
        if health.cookie_status.get(platform):
            self.state.status_text = f"Connected to {platform} API"
        else:
            self.state.status_text = f"Warning: Missing cookies for {platform}"

        self.state.status = ConnectionStatus.CONNECTED
        self.state.retry_count = 0

        if not was_connected:
            logger.info(f"Shop proxy connected: {self.state.status_text}")

    def _on_probe_failure(self, error: str) -> None:
        if self.state.status != ConnectionStatus.DISCONNECTED:
            logger.warning(f"Shop proxy unreachable: {error}")

        self.state.status = ConnectionStatus.DISCONNECTED
        self.state.status_text = NOT_RESPONDING

        if self._retry_task is not None:
            return

        if self.state.retry_count < self.max_retries:
            self.state.retry_count += 1
            logger.debug(
                f"Retrying health probe in {self.retry_delay}s "
                f"({self.state.retry_count}/{self.max_retries})"
            )
            self._retry_task = asyncio.create_task(self._retry_later())
        else:
            logger.warning("Health probe retries exhausted, waiting for next scheduled check")

    async def _retry_later(self) -> None:
        await asyncio.sleep(self.retry_delay)
        self._retry_task = None
        await self.probe()

    def _cancel_retry(self) -> None:
        if self._retry_task is not None:
            self._retry_task.cancel()
            self._retry_task = None

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def _run(self) -> None:
        while True:
            # Each scheduled check starts with a full set of retries
            self._cancel_retry()
            self.state.retry_count = 0

            try:
                await self.probe()
            except Exception as e:
                logger.error(f"Health probe crashed: {e}", exc_info=True)

            await asyncio.sleep(self.interval)

    def start(self) -> None:
        """Start periodic probing."""
        if self.running:
            return
        logger.info(f"Starting connectivity monitor (every {self.interval}s)")
        self._loop_task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop probing and drop any pending retry."""
        tasks = [task for task in (self._loop_task, self._retry_task) if task is not None]
        self._loop_task = None
        self._retry_task = None

        for task in tasks:
            task.cancel()
        for task in tasks:
            with suppress(asyncio.CancelledError):
                await task

        logger.info("Connectivity monitor stopped")

    # =========================================================================
    # PLATFORM SWITCH
    # =========================================================================

    async def request_platform_switch(self, platform: str) -> ConnectionState:
        """
        Switch the proxy to another platform and re-probe.

        Raises:
            PlatformSwitchError: switch failed, previous platform kept
        """
        previous = self.state.active_platform
        if platform == previous:
            return self.state

        try:
            current = await self.proxy.switch_platform(platform)
        except TransportFailure as e:
            raise PlatformSwitchError(str(e)) from e

        self.state.active_platform = current
        logger.info(f"Platform switched: {previous} -> {current}")

        await self.probe()
        return self.state
