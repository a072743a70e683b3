"""Send namespaced, cluster-tagged gauges and events to DogStatsD."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from datadog.dogstatsd import DogStatsd

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "aws.ecs"
DEFAULT_STATSD_PORT = 8125
UNIX_SOCKET_SCHEME = "unix://"

# DogStatsd rejects event payloads of 8KB or more; title and text share that budget
MAX_EVENT_FIELD_LENGTH = 3500
TRUNCATION_MARKER = "..."


def _truncate(value: str, limit: int = MAX_EVENT_FIELD_LENGTH) -> str:
    if len(value) <= limit:
        return value
    return value[: limit - len(TRUNCATION_MARKER)] + TRUNCATION_MARKER


def create_statsd_client(address: str) -> DogStatsd:
    """Build an unbuffered DogStatsd client from host:port or unix:///path."""
    if address.startswith(UNIX_SOCKET_SCHEME):
        socket_path = address[len(UNIX_SOCKET_SCHEME):]
        if not socket_path:
            raise ValueError(f"Invalid statsd address: {address!r}")
        return DogStatsd(socket_path=socket_path, disable_buffering=True)

    host, sep, port = address.rpartition(":")
    if not sep:
        host, port = address, str(DEFAULT_STATSD_PORT)
    if not host or not port.isdigit():
        raise ValueError(f"Invalid statsd address: {address!r}")
    return DogStatsd(host=host, port=int(port), disable_buffering=True)


class MetricEmitter:
    """Emits gauges and events for one cluster with consistent naming and tags."""

    def __init__(self, statsd: Any, cluster: str, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.cluster = cluster
        self.namespace = namespace
        self._statsd = statsd

    def _tags(self, tags: list[str]) -> list[str]:
        # Always a new list; caller tag lists are shared between calls
        return [*tags, f"cluster_name:{self.cluster}"]

    def gauge(self, name: str, value: float, tags: list[str], sample_rate: float = 1) -> None:
        """Send gauge `<namespace>.<name>`; sink errors propagate."""
        self._statsd.gauge(
            f"{self.namespace}.{name}",
            float(value),
            tags=self._tags(tags),
            sample_rate=sample_rate,
        )

    def event(
        self,
        title: str,
        text: str,
        timestamp: datetime,
        aggregation_key: str,
        tags: list[str],
    ) -> None:
        """Send a discrete event, truncating over-long title and text; sink errors propagate."""
        self._statsd.event(
            _truncate(title),
            _truncate(text),
            aggregation_key=aggregation_key,
            date_happened=int(timestamp.timestamp()),
            tags=self._tags(tags),
        )

    def close(self) -> None:
        """Release the sink's socket."""
        logger.debug("Closing statsd client")
        self._statsd.close_socket()
