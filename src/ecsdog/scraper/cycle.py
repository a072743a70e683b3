"""One scrape pass: describe every known service and emit its metrics."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from typing import Protocol

from ecsdog.metrics import MetricEmitter
from ecsdog.observation.models import DescribeResult, ServiceStatus
from ecsdog.scraper.batching import chunk
from ecsdog.scraper.events import EventDeduplicator
from ecsdog.scraper.inventory import ServiceInventory

logger = logging.getLogger(__name__)

# Extra tag attached to every service event
EVENT_TAG = "ecs"


class ClusterQueryService(Protocol):
    def iter_service_arn_pages(self, cluster: str) -> Iterator[list[str]]: ...

    def describe_services(self, cluster: str, arns: list[str]) -> DescribeResult: ...


class Scraper:
    """Scrapes metrics for the services of a single ECS cluster.

    Holds the inventory and the reported-events set behind one lock; refresh
    and scrape each keep it for their whole duration, so passes never overlap.
    """

    def __init__(self, cluster: str, collector: ClusterQueryService, emitter: MetricEmitter) -> None:
        self.cluster = cluster
        self._collector = collector
        self._emitter = emitter
        self._lock = threading.RLock()
        self.inventory = ServiceInventory(collector, cluster, self._lock)
        self.events = EventDeduplicator()

    def refresh_services(self) -> None:
        """Reload the list of known services."""
        with self._lock:
            self.inventory.refresh()

    def scrape(self) -> None:
        """Emit metrics for every known service. The first error aborts the pass."""
        with self._lock:
            services = self.inventory.current()
            self._emitter.gauge("services", len(services), [])

            for batch in chunk(services):
                result = self._collector.describe_services(self.cluster, batch)

                for failure in result.failures:
                    if failure.detail:
                        logger.warning(
                            "Failed to describe %s: %s (%s)", failure.arn, failure.reason, failure.detail
                        )
                    else:
                        logger.warning("Failed to describe %s: %s", failure.arn, failure.reason)

                for service in result.services:
                    self._scrape_service(service)

    def _scrape_service(self, service: ServiceStatus) -> None:
        logger.debug("Scraping metrics from %s", service.name)

        tags = [f"service_name:{service.name}", f"service_status:{service.status}"]

        self._emitter.gauge("service.desired", service.desired_count, tags)
        self._emitter.gauge("service.pending", service.pending_count, tags)
        self._emitter.gauge("service.running", service.running_count, tags)

        counts: dict[str, int] = {}
        for deployment in service.deployments:
            counts[deployment.status] = counts.get(deployment.status, 0) + 1
            dtags = [*tags, f"deployment:{deployment.id}", f"deployment_status:{deployment.status}"]
            self._emitter.gauge("service.deployment.desired", deployment.desired_count, dtags)
            self._emitter.gauge("service.deployment.pending", deployment.pending_count, dtags)
            self._emitter.gauge("service.deployment.running", deployment.running_count, dtags)

        self._emitter.gauge("service.deployments", len(service.deployments), tags)
        for status, count in counts.items():
            self._emitter.gauge(f"service.deployments.{status.lower()}", count, tags)

        for event in service.events:
            if self.events.has_seen(event.id):
                continue
            self._emitter.event(
                title=event.message,
                text=event.message,
                timestamp=event.created_at,
                aggregation_key=service.name,
                tags=[*tags, EVENT_TAG],
            )
            self.events.mark_seen(event.id)
