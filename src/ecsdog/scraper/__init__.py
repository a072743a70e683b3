"""Scraper: inventory, scrape passes, and the scheduling loop."""

from ecsdog.scraper.batching import BATCH_SIZE, chunk
from ecsdog.scraper.cycle import Scraper
from ecsdog.scraper.events import EventDeduplicator
from ecsdog.scraper.inventory import ServiceInventory
from ecsdog.scraper.scheduler import Scheduler, SchedulerState, run

__all__ = [
    "BATCH_SIZE",
    "chunk",
    "EventDeduplicator",
    "Scheduler",
    "SchedulerState",
    "Scraper",
    "ServiceInventory",
    "run",
]
