"""Metrics layer: gauge and event emission to DogStatsD."""

from ecsdog.metrics.emitter import DEFAULT_NAMESPACE, MetricEmitter, create_statsd_client

__all__ = [
    "DEFAULT_NAMESPACE",
    "MetricEmitter",
    "create_statsd_client",
]
