"""Use cases behind the /health and /info endpoints."""

from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from devices_api.application.dtos.health_dto import ApplicationInfoDTO, SystemHealthDTO
from devices_api.application.models import SystemInfo
from devices_api.domain.entities.health import ApplicationInfo
from devices_api.domain.ports.health_check import IHealthCheckService


def redact_url(url: str) -> str:
    """Drop user credentials from a connection URL."""
    parsed = urlsplit(url) if url else None
    if parsed is None or not (parsed.username or parsed.password):
        return url

    host = parsed.hostname or ""
    if parsed.port:
        host = f"{host}:{parsed.port}"
    return urlunsplit(parsed._replace(netloc=host))


class GetHealthStatusUseCase:
    """Probe the dependencies and report the aggregated status."""

    def __init__(self, health_check_service: IHealthCheckService) -> None:
        self._health_check_service = health_check_service

    async def execute(self) -> SystemHealthDTO:
        return SystemHealthDTO.from_domain(await self._health_check_service.evaluate())


class GetApplicationInfoUseCase:
    """Combine build metadata, uptime and dependency health."""

    def __init__(
        self,
        health_check_service: IHealthCheckService,
        system_info: SystemInfo,
    ) -> None:
        self._health_check_service = health_check_service
        self._info = system_info

    async def execute(self, started_at: Optional[datetime]) -> ApplicationInfoDTO:
        now = datetime.now(timezone.utc)
        info = ApplicationInfo(
            name=self._info.title,
            description=self._info.description,
            version=self._info.version,
            environment=self._info.environment,
            git_commit=self._info.git_commit,
            build_time=self._info.build_time,
            started_at=started_at or now,
            health=await self._health_check_service.evaluate(),
            extras={
                "api": {"prefix": self._info.api_prefix},
                "database": {
                    # credentials never leave the process
                    "uri": redact_url(self._info.database_uri),
                    "name": self._info.database_name,
                },
            },
        )
        return ApplicationInfoDTO.from_domain(info, now=now)
