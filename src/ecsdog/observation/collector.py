"""Query the ECS control plane for service inventory and per-service status."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ecsdog.observation.models import (
    DescribeResult,
    Deployment,
    ServiceEvent,
    ServiceFailure,
    ServiceStatus,
)

logger = logging.getLogger(__name__)

# DescribeServices accepts at most this many services per call
MAX_DESCRIBE_SERVICES = 10


def _build_ecs_client(
    region: str | None,
    endpoint_url: str | None,
    max_attempts: int,
) -> Any:
    """Create a boto3 ECS client; credentials come from the default chain."""
    session = boto3.session.Session(region_name=region)
    kwargs: dict[str, Any] = {
        "config": Config(retries={"max_attempts": max_attempts, "mode": "standard"}),
    }
    if endpoint_url:
        kwargs["endpoint_url"] = endpoint_url
    return session.client("ecs", **kwargs)


def _build_deployment(d: dict[str, Any]) -> Deployment:
    """Build Deployment from a DescribeServices deployment entry."""
    return Deployment(
        id=d.get("id", ""),
        status=d.get("status", ""),
        desired_count=d.get("desiredCount") or 0,
        pending_count=d.get("pendingCount") or 0,
        running_count=d.get("runningCount") or 0,
    )


def _build_event(ev: dict[str, Any], service_name: str) -> ServiceEvent:
    """Build ServiceEvent from a DescribeServices event entry."""
    return ServiceEvent(
        id=ev["id"],
        message=ev.get("message") or "",
        created_at=ev["createdAt"],
        service_name=service_name,
    )


def _build_service_status(svc: dict[str, Any]) -> ServiceStatus:
    """Build ServiceStatus from a DescribeServices service entry."""
    name = svc.get("serviceName", "")
    return ServiceStatus(
        arn=svc.get("serviceArn", ""),
        name=name,
        status=svc.get("status", ""),
        desired_count=svc.get("desiredCount") or 0,
        pending_count=svc.get("pendingCount") or 0,
        running_count=svc.get("runningCount") or 0,
        deployments=[_build_deployment(d) for d in svc.get("deployments") or []],
        events=[_build_event(ev, name) for ev in svc.get("events") or []],
    )


class EcsCollector:
    """Reads service inventory and service status from an ECS cluster."""

    def __init__(
        self,
        client: Any | None = None,
        region: str | None = None,
        endpoint_url: str | None = None,
        max_attempts: int = 3,
    ) -> None:
        self._ecs = client if client is not None else _build_ecs_client(region, endpoint_url, max_attempts)

    def iter_service_arn_pages(self, cluster: str) -> Iterator[list[str]]:
        """Yield the cluster's service ARNs one ListServices page at a time."""
        try:
            paginator = self._ecs.get_paginator("list_services")
            for page in paginator.paginate(cluster=cluster):
                yield list(page.get("serviceArns") or [])
        except (ClientError, BotoCoreError) as e:
            logger.warning("Failed to list services in %s: %s", cluster, e)
            raise

    def describe_services(self, cluster: str, arns: list[str]) -> DescribeResult:
        """Describe up to MAX_DESCRIBE_SERVICES services in a single call."""
        if len(arns) > MAX_DESCRIBE_SERVICES:
            raise ValueError(
                f"describe_services accepts at most {MAX_DESCRIBE_SERVICES} services, got {len(arns)}"
            )
        try:
            resp = self._ecs.describe_services(cluster=cluster, services=list(arns))
        except (ClientError, BotoCoreError) as e:
            logger.warning("Failed to describe services in %s: %s", cluster, e)
            raise

        return DescribeResult(
            services=[_build_service_status(s) for s in resp.get("services") or []],
            failures=[
                ServiceFailure(
                    arn=f.get("arn", ""),
                    reason=f.get("reason", ""),
                    detail=f.get("detail"),
                )
                for f in resp.get("failures") or []
            ],
        )
