"""
Database package - Infrastructure Layer

MongoDB connection handling shared by the repositories and health checks.
"""

from devices_api.infrastructure.database.mongo_database import MongoDatabase

__all__ = ["MongoDatabase"]
