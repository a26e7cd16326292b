"""Static service facts handed to the application layer by the container."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SystemInfo:
    """Build metadata and deployment settings shown by /info."""

    title: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    database_uri: str
    database_name: str
    api_prefix: str = "/api/v1"
