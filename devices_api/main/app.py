"""
FastAPI application for the Devices API.

Builds the app around the dependency container: device routes under the
configured prefix, /health and /info at the root, and JSON error bodies for
every failure.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from devices_api.main.config import AppSettings, get_settings
from devices_api.main.container import app_lifespan, init_container
from devices_api.presentation.controllers import devices_router, system_router
from devices_api.presentation.errors import register_exception_handlers
from devices_api.shared import configure_logging, get_logger, update_logging_from_settings

# Console logging until settings are known
configure_logging()
settings = get_settings()
update_logging_from_settings(settings)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management.

    Stamps the start time reported by /info, then lets the container create
    the MongoDB indexes and close the client on shutdown.
    """
    app.state.started_at = datetime.now(timezone.utc)
    logger.info("app.starting")

    async with app_lifespan() as container:
        app.state.container = container
        yield

    logger.info("app.stopped")


def create_app(app_settings: Optional[AppSettings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to build the app with, loaded from the
            environment when omitted

    Returns:
        FastAPI: The configured FastAPI application
    """
    app_settings = app_settings or get_settings()

    # Initialize dependency injection container
    init_container(app_settings)

    app = FastAPI(
        title=app_settings.api.title,
        description=app_settings.api.description,
        version=app_settings.api.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(devices_router, prefix=app_settings.api.prefix)
    app.include_router(system_router)

    return app


app = create_app(settings)
