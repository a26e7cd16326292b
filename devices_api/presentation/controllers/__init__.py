"""
Controllers Package - Presentation Layer

This package contains the FastAPI routers. Controllers translate HTTP
requests into service calls and service results into HTTP responses.
"""

from .devices_controller import router as devices_router
from .system_controller import router as system_router

__all__ = ["devices_router", "system_router"]
