"""Infrastructure implementation for system health checks."""

from __future__ import annotations

import asyncio
from time import perf_counter
from typing import Optional

from devices_api.domain.entities.health import (
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)
from devices_api.domain.ports.health_check import IHealthCheckService
from devices_api.infrastructure.database.mongo_database import MongoDatabase
from devices_api.shared import get_logger

logger = get_logger(__name__)


class HealthCheckService(IHealthCheckService):
    """Collect health information for the MongoDB deployment."""

    def __init__(
        self,
        mongo_database: Optional[MongoDatabase],
        *,
        timeout: float = 5.0,
    ) -> None:
        self._mongo_database = mongo_database
        self._timeout = timeout

    async def evaluate(self) -> SystemHealth:
        return SystemHealth.from_dependencies([await self.check_database()])

    async def check_database(self) -> DependencyStatus:
        if not self._mongo_database:
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.UNKNOWN,
                message="Mongo database client not configured.",
            )

        start = perf_counter()
        try:
            await asyncio.wait_for(
                asyncio.to_thread(self._mongo_database.client.admin.command, "ping"),
                timeout=self._timeout,
            )
        except Exception as exc:
            latency_ms = (perf_counter() - start) * 1000
            logger.warning("health.mongo.ping_failed", error=str(exc))
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.DOWN,
                message=f"MongoDB ping failed: {exc}",
                latency_ms=latency_ms,
            )

        latency_ms = (perf_counter() - start) * 1000
        return DependencyStatus(
            name="mongo",
            status=ServiceStatus.UP,
            message="MongoDB ping successful",
            latency_ms=latency_ms,
            details={"database": self._mongo_database.db.name},
        )
