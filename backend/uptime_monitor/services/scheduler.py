"""Scheduler service - drives the monitoring loop.

Design:
- A forced check of every endpoint at startup, each followed by a
  notification regardless of outcome (proves the notifier path works)
- Afterwards a single shared interval job; notifications only fire when
  an endpoint flips between up and down
- Probes within a cycle run concurrently (bounded by a semaphore); results
  are then notified, recorded and logged one endpoint at a time, in
  configured order
- max_instances=1 on the job keeps cycles from overlapping
"""
import asyncio
import logging
from typing import List, Optional

import httpx
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from ..config import MonitorConfig
from .alerter import Notifier, build_notifier
from .checker import CheckerService, ProbeResult
from .metrics_store import MetricsStore

logger = logging.getLogger(__name__)


def status_from(success: bool) -> str:
    return "up" if success else "down"


class SchedulerService:
    """Owns the endpoint list, the metrics store and the notifier."""

    def __init__(
        self,
        config: MonitorConfig,
        client: httpx.AsyncClient,
        notifier: Optional[Notifier] = None,
        store: Optional[MetricsStore] = None,
    ):
        self.config = config
        self.client = client
        self.checker = CheckerService(client)
        self.store = store or MetricsStore(config.endpoints, config.metrics_path)
        self.notifier = notifier or build_notifier(
            client, config.webhook_url, config.notification_timeout
        )
        self.scheduler: Optional[AsyncIOScheduler] = None
        self._running = False

    async def run_initial_checks(self):
        """Check every endpoint once and notify unconditionally."""
        for endpoint in self.config.endpoints:
            logger.info(f"Performing initial status check for {endpoint}")
            result = await self.checker.probe(endpoint, self.config.timeout)
            logger.info(f"Initial check result for {endpoint} - Success: {result.success}")

            logger.info(f"Forcing initial notification for {endpoint}")
            await self.notifier.notify(endpoint, not result.success, result.response_time)

            self.store.record(
                endpoint, result.success, result.response_time, self.config.check_interval
            )

    async def _probe_all(self) -> List[ProbeResult]:
        """Probe every endpoint, results in configured order."""
        semaphore = asyncio.Semaphore(self.config.max_concurrent_checks)

        async def probe_with_limit(endpoint: str) -> ProbeResult:
            async with semaphore:
                return await self.checker.probe(endpoint, self.config.timeout)

        return await asyncio.gather(
            *[probe_with_limit(endpoint) for endpoint in self.config.endpoints]
        )

    async def run_cycle(self):
        """Run one steady-state cycle over all endpoints."""
        results = await self._probe_all()

        for endpoint, result in zip(self.config.endpoints, results):
            try:
                await self._process_result(endpoint, result)
            except Exception:
                logger.exception(f"Error processing check result for {endpoint}")

    async def _process_result(self, endpoint: str, result: ProbeResult):
        # Prior status must be read before this cycle's record call
        last_status = self.store.last_status(endpoint)
        current_status = status_from(result.success)

        if last_status is not None:
            status_changed = last_status != current_status
            logger.info(
                f"Status check for {endpoint} - Last: {last_status}, "
                f"Current: {current_status}, Changed: {status_changed}"
            )
            if status_changed:
                logger.info(f"Status changed for {endpoint} - sending notification")
                await self.notifier.notify(endpoint, not result.success, result.response_time)

        metrics = self.store.record(
            endpoint, result.success, result.response_time, self.config.check_interval
        )

        http_status = f"HTTP {result.status_code}" if result.status_code else result.error
        logger.info(
            f"{endpoint} {current_status.upper()} ({http_status}) | "
            f"{result.response_time:.2f}s | {metrics.success_rate:.2f}%"
        )

    async def start(self):
        """Run the startup checks, then schedule the periodic cycle."""
        if self._running:
            return

        logger.info(f"Starting uptime monitoring for {len(self.config.endpoints)} endpoints")
        await self.run_initial_checks()

        self.scheduler = AsyncIOScheduler()
        self.scheduler.add_job(
            self.run_cycle,
            trigger=IntervalTrigger(seconds=self.config.check_interval),
            id="run_cycle",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self.scheduler.start()
        self._running = True
        logger.info(f"Scheduler started (interval={self.config.check_interval}s)")

    def stop(self):
        """Stop the scheduler; in-flight probes are abandoned."""
        if self.scheduler and self._running:
            self.scheduler.shutdown(wait=False)
            self._running = False
            logger.info("Scheduler stopped")

    async def run_forever(self):
        """Start monitoring and block until the process is terminated."""
        await self.start()
        try:
            await asyncio.Event().wait()
        finally:
            self.stop()
