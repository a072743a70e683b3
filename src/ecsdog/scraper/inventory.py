"""Known service identifiers for the scraped cluster."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from datetime import datetime, timezone
from typing import Protocol

logger = logging.getLogger(__name__)


class ServiceLister(Protocol):
    def iter_service_arn_pages(self, cluster: str) -> Iterator[list[str]]: ...


class ServiceInventory:
    """Ordered service ARNs, replaced wholesale on each refresh."""

    def __init__(self, lister: ServiceLister, cluster: str, lock: threading.RLock) -> None:
        self.cluster = cluster
        self.last_refreshed: datetime | None = None
        self._lister = lister
        self._lock = lock
        self._services: list[str] = []

    def refresh(self) -> None:
        """Drain every page of service ARNs; on error the previous list is kept."""
        with self._lock:
            services: list[str] = []
            for page in self._lister.iter_service_arn_pages(self.cluster):
                services.extend(page)
            self._services = services
            self.last_refreshed = datetime.now(timezone.utc)
            logger.debug("Found %d services in %s", len(self._services), self.cluster)

    def current(self) -> list[str]:
        with self._lock:
            return list(self._services)

    def __len__(self) -> int:
        with self._lock:
            return len(self._services)
