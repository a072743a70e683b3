"""Structured models for ECS service state returned by the control plane."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class Deployment(BaseModel):
    """Deployment (rollout) of a service."""

    id: str
    status: str  # PRIMARY | ACTIVE | INACTIVE
    desired_count: int = 0
    pending_count: int = 0
    running_count: int = 0


class ServiceEvent(BaseModel):
    """Recent service event as reported by ECS."""

    id: str
    message: str
    created_at: datetime
    service_name: str


class ServiceStatus(BaseModel):
    """Point-in-time status of a single ECS service."""

    arn: str
    name: str
    status: str  # ACTIVE | DRAINING | INACTIVE
    desired_count: int = 0
    pending_count: int = 0
    running_count: int = 0
    deployments: list[Deployment] = Field(default_factory=list)
    events: list[ServiceEvent] = Field(
        default_factory=list,
        description="Most recent events first, as returned by DescribeServices",
    )


class ServiceFailure(BaseModel):
    """An identifier the control plane could not resolve."""

    arn: str
    reason: str
    detail: str | None = None


class DescribeResult(BaseModel):
    """Result of describing one batch of services."""

    services: list[ServiceStatus] = Field(default_factory=list)
    failures: list[ServiceFailure] = Field(default_factory=list)
