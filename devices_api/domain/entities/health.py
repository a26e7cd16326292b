"""
Health domain entities.

Value objects describing whether the service and the MongoDB deployment
behind it can currently serve requests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class ServiceStatus(str, Enum):
    """Availability of a dependency or of the whole service."""

    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"
    UNKNOWN = "unknown"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {
    ServiceStatus.UP: 0,
    ServiceStatus.UNKNOWN: 1,
    ServiceStatus.DEGRADED: 2,
    ServiceStatus.DOWN: 3,
}


@dataclass(slots=True)
class DependencyStatus:
    """Outcome of probing one dependency."""

    name: str
    status: ServiceStatus
    message: Optional[str] = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    latency_ms: Optional[float] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class SystemHealth:
    """Overall status plus the probes it was derived from."""

    status: ServiceStatus
    dependencies: List[DependencyStatus] = field(default_factory=list)

    @classmethod
    def from_dependencies(cls, statuses: Iterable[DependencyStatus]) -> SystemHealth:
        """
        The most severe dependency status becomes the overall status.

        Severity grows from UP to UNKNOWN, DEGRADED and DOWN. Having nothing
        to probe is reported as UNKNOWN.
        """
        dependencies = list(statuses)
        if not dependencies:
            return cls(status=ServiceStatus.UNKNOWN)

        worst = max((d.status for d in dependencies), key=lambda s: s.severity)
        return cls(status=worst, dependencies=dependencies)


@dataclass(slots=True)
class ApplicationInfo:
    """Build and runtime facts reported by the /info endpoint."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    health: SystemHealth
    extras: Dict[str, Any] = field(default_factory=dict)

    def uptime_seconds(self, now: datetime) -> float:
        return max(0.0, (now - self.started_at).total_seconds())
