"""
Dependency injection container of the Devices API.

Singletons for the MongoDB connection, the device repository and the health
probe; a fresh DeviceService and use case per request.
"""

from contextlib import asynccontextmanager
from typing import Optional

from dependency_injector import containers, providers

from devices_api.application.models import SystemInfo
from devices_api.application.services.device_service import DeviceService
from devices_api.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from devices_api.infrastructure.database import MongoDatabase
from devices_api.infrastructure.repositories.device_repository import (
    DeviceRepository,
)
from devices_api.infrastructure.services.health_check_service import (
    HealthCheckService,
)
from devices_api.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Providers for every layer, configured from AppSettings."""

    wiring_config = containers.WiringConfiguration(
        packages=["..presentation", "..application"]
    )

    # Settings
    config = providers.Configuration()

    # Infrastructure
    mongo_database = providers.Singleton(
        MongoDatabase,
        mongo_uri=config.database.mongo_uri,
        db_name=config.database.database_name,
        server_selection_timeout_ms=config.database.server_selection_timeout_ms,
    )

    device_repository = providers.Singleton(
        DeviceRepository,
        mongo_database=mongo_database,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        mongo_database=mongo_database,
        timeout=config.database.health_timeout_seconds,
    )

    # Application
    device_service = providers.Factory(
        DeviceService,
        device_repository=device_repository,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.api.title,
        description=config.api.description,
        version=config.api.version,
        environment=providers.Callable(
            lambda env: env.value if hasattr(env, "value") else str(env),
            config.environment,
        ),
        git_commit=config.api.git_commit,
        build_time=config.api.build_time,
        database_uri=config.database.mongo_uri,
        database_name=config.database.database_name,
        api_prefix=config.api.prefix,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: Optional[AppContainer] = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Lifecycle of the external resources held by the container.

    Ensures the device indexes exist on startup and closes the MongoDB
    client on shutdown.
    """
    container = get_container()
    mongo_database = container.mongo_database()

    try:
        logger.info("container.mongo.ensure_indexes")
        await mongo_database.create_indexes()

        logger.info("container.resources.initialized")
        yield container

    finally:
        logger.info("container.mongo.close")
        mongo_database.close()

        logger.info("container.resources.shutdown")
