"""Observation layer: query ECS for service inventory and status."""

from ecsdog.observation.collector import EcsCollector
from ecsdog.observation.models import (
    DescribeResult,
    Deployment,
    ServiceEvent,
    ServiceFailure,
    ServiceStatus,
)

__all__ = [
    "EcsCollector",
    "DescribeResult",
    "Deployment",
    "ServiceEvent",
    "ServiceFailure",
    "ServiceStatus",
]
