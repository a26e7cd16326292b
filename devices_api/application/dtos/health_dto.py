"""DTOs for the /health and /info responses."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from devices_api.domain.entities.health import (
    ApplicationInfo,
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)

_MONGO_PROBE = {
    "name": "mongo",
    "status": "up",
    "message": "MongoDB ping successful",
    "checked_at": "2024-09-09T12:00:00Z",
    "latency_ms": 3.2,
    "details": {"database": "devices_db"},
}


class DependencyStatusDTO(BaseModel):
    """One dependency probe."""

    model_config = ConfigDict(
        from_attributes=True, json_schema_extra={"example": _MONGO_PROBE}
    )

    name: str = Field(description="Dependency identifier")
    status: ServiceStatus = Field(description="Status of the dependency")
    message: Optional[str] = Field(default=None, description="Probe outcome")
    checked_at: datetime = Field(description="When the probe ran")
    latency_ms: Optional[float] = Field(default=None, description="Round trip in ms")
    details: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, status: DependencyStatus) -> DependencyStatusDTO:
        return cls.model_validate(status)


class SystemHealthDTO(BaseModel):
    """Body of the /health response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": {"status": "up", "dependencies": [_MONGO_PROBE]}},
    )

    status: ServiceStatus = Field(description="Overall status")
    dependencies: List[DependencyStatusDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, health: SystemHealth) -> SystemHealthDTO:
        return cls.model_validate(health)


class ApplicationInfoDTO(BaseModel):
    """Body of the /info response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Devices API",
                "description": "REST API for managing device resources",
                "version": "1.0.0",
                "environment": "development",
                "git_commit": "abcdef1",
                "build_time": "2024-09-09T11:30:00Z",
                "started_at": "2024-09-09T12:00:00Z",
                "uptime_seconds": 3600.5,
                "status": "up",
                "dependencies": [_MONGO_PROBE],
                "extras": {
                    "api": {"prefix": "/api/v1"},
                    "database": {"uri": "mongodb://mongo:27017", "name": "devices_db"},
                },
            }
        }
    )

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    status: ServiceStatus
    dependencies: List[DependencyStatusDTO] = Field(default_factory=list)
    extras: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(
        cls, info: ApplicationInfo, now: Optional[datetime] = None
    ) -> ApplicationInfoDTO:
        now = now or datetime.now(timezone.utc)
        return cls(
            name=info.name,
            description=info.description,
            version=info.version,
            environment=info.environment,
            git_commit=info.git_commit,
            build_time=info.build_time,
            started_at=info.started_at,
            uptime_seconds=info.uptime_seconds(now),
            status=info.health.status,
            dependencies=[
                DependencyStatusDTO.from_domain(dependency)
                for dependency in info.health.dependencies
            ],
            extras=info.extras,
        )
