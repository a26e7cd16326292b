"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as the MongoDB
database and the health probes run against it.
"""

from devices_api.infrastructure import database, repositories, services

__all__ = ["database", "repositories", "services"]
