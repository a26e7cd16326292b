"""Port for probing the service's runtime dependencies."""

from __future__ import annotations

from typing import Protocol

from devices_api.domain.entities.health import DependencyStatus, SystemHealth


class IHealthCheckService(Protocol):
    """Reports whether the device store can currently be reached."""

    async def check_database(self) -> DependencyStatus:
        """Probe the database backing the device repository."""
        ...

    async def evaluate(self) -> SystemHealth:
        """Probe every dependency and aggregate the results."""
        ...
