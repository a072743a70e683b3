"""Shared fixtures for scraper tests."""

from __future__ import annotations

import threading
import time
from collections.abc import Iterator
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from ecsdog.metrics import MetricEmitter
from ecsdog.observation.models import (
    DescribeResult,
    Deployment,
    ServiceEvent,
    ServiceFailure,
    ServiceStatus,
)

CLUSTER = "production"


def make_service(
    arn: str,
    deployments: list[tuple[str, str]] | None = None,
    events: list[str] | None = None,
    status: str = "ACTIVE",
) -> ServiceStatus:
    """Build a ServiceStatus named after the last ARN segment."""
    name = arn.rsplit("/", 1)[-1]
    return ServiceStatus(
        arn=arn,
        name=name,
        status=status,
        desired_count=3,
        pending_count=1,
        running_count=2,
        deployments=[
            Deployment(id=dep_id, status=dep_status, desired_count=3, pending_count=0, running_count=3)
            for dep_id, dep_status in (deployments or [])
        ],
        events=[
            ServiceEvent(
                id=event_id,
                message=f"({name}) {event_id} happened",
                created_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
                service_name=name,
            )
            for event_id in (events or [])
        ],
    )


class FakeCollector:
    """In-memory cluster query service recording every describe batch."""

    def __init__(self, services: dict[str, ServiceStatus] | None = None) -> None:
        self.services = services or {}
        self.arns = list(self.services)
        self.missing: set[str] = set()
        self.describe_calls: list[list[str]] = []
        self.fail_on_call: int | None = None
        self.list_error: Exception | None = None
        self.pages_before_error = 0
        self.page_size = 2
        self.missing_detail: str | None = None
        self.describe_started = threading.Event()
        self.describe_delay = 0.0
        self.calls: list[str] = []

    def iter_service_arn_pages(self, cluster: str) -> Iterator[list[str]]:
        self.calls.append("list")
        for page_number, start in enumerate(range(0, max(len(self.arns), 1), self.page_size)):
            if self.list_error is not None and page_number == self.pages_before_error:
                raise self.list_error
            yield list(self.arns[start : start + self.page_size])

    def describe_services(self, cluster: str, arns: list[str]) -> DescribeResult:
        self.describe_calls.append(list(arns))
        self.describe_started.set()
        if self.describe_delay:
            time.sleep(self.describe_delay)
        self.calls.append("describe")
        if self.fail_on_call is not None and len(self.describe_calls) == self.fail_on_call:
            raise RuntimeError("DescribeServices unavailable")
        return DescribeResult(
            services=[self.services[a] for a in arns if a in self.services and a not in self.missing],
            failures=[
                ServiceFailure(arn=a, reason="MISSING", detail=self.missing_detail)
                for a in arns
                if a not in self.services or a in self.missing
            ],
        )


def gauge_calls(statsd: MagicMock) -> list[tuple[str, float, list[str]]]:
    """Flatten recorded DogStatsd.gauge calls to (name, value, tags)."""
    return [(c.args[0], c.args[1], c.kwargs["tags"]) for c in statsd.gauge.call_args_list]


@pytest.fixture
def statsd():
    """Mock DogStatsd client."""
    return MagicMock()


@pytest.fixture
def emitter(statsd):
    return MetricEmitter(statsd, CLUSTER)
