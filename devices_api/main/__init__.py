"""
Composition root of the Devices API.

Loads settings from the environment, builds the dependency container that
wires MongoDB, the device repository and the services together, and
assembles the FastAPI application served by uvicorn.
"""

from .config import AppSettings, get_settings
from .container import AppContainer, get_container, init_container

__all__ = [
    "AppContainer",
    "AppSettings",
    "get_container",
    "get_settings",
    "init_container",
]
