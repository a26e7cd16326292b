"""
Presentation Layer Package

This package contains the presentation layer components: the FastAPI
routers and the translation of errors into HTTP responses.
"""

from devices_api.presentation import controllers, errors

__all__ = ["controllers", "errors"]
