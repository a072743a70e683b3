"""Drive scrape passes on a fixed interval until the first error."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import Enum

from ecsdog.config import Settings, get_settings
from ecsdog.metrics import MetricEmitter, create_statsd_client
from ecsdog.observation import EcsCollector
from ecsdog.scraper.cycle import Scraper

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 20.0


class SchedulerState(str, Enum):
    """Lifecycle of the scrape loop."""

    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class Scheduler:
    """Runs Scraper.scrape every `interval` seconds, forever.

    The service list is loaded once before the first pass; if that fails the
    loop never starts. Ticks are aligned to the start time. A pass that
    overruns its slot pushes the next one to the following aligned tick, and
    missed ticks are dropped. Any error stops the loop and is re-raised.
    """

    def __init__(
        self,
        scraper: Scraper,
        interval: float = DEFAULT_INTERVAL_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self.state = SchedulerState.IDLE
        self.cycles = 0
        self._scraper = scraper
        self._sleep = sleep
        self._clock = clock

    def start(self) -> None:
        """Refresh the inventory, then scrape on every tick. Returns only by raising."""
        if self.state is not SchedulerState.IDLE:
            raise RuntimeError(f"Scheduler already {self.state.value}")
        self.state = SchedulerState.RUNNING
        try:
            self._scraper.refresh_services()
            logger.info(
                "Scraping %d services in %s every %ss",
                len(self._scraper.inventory),
                self._scraper.cluster,
                self.interval,
            )
            next_tick = self._clock() + self.interval
            while True:
                delay = next_tick - self._clock()
                if delay > 0:
                    self._sleep(delay)
                self._scraper.scrape()
                self.cycles += 1
                next_tick = self._next_tick(next_tick)
        except Exception:
            self.state = SchedulerState.STOPPED
            raise

    def _next_tick(self, previous: float) -> float:
        next_tick = previous + self.interval
        now = self._clock()
        if now > next_tick:
            missed = int((now - next_tick) // self.interval) + 1
            logger.debug("Scrape overran by %d tick(s)", missed)
            next_tick += missed * self.interval
        return next_tick


def run(cluster: str, statsd_address: str, settings: Settings | None = None) -> None:
    """Build the ECS and DogStatsD clients and scrape `cluster` until an error occurs."""
    opts = settings or get_settings()
    collector = EcsCollector(
        region=opts.aws_region,
        endpoint_url=opts.aws_endpoint_url,
        max_attempts=opts.aws_max_attempts,
    )
    emitter = MetricEmitter(create_statsd_client(statsd_address), cluster)
    try:
        scraper = Scraper(cluster, collector, emitter)
        Scheduler(scraper, interval=opts.interval_seconds).start()
    finally:
        emitter.close()
