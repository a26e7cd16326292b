from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Timestamps in error payloads, e.g. 2024-09-09T12:00:00Z
ERROR_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Third-party loggers that are too chatty at DEBUG level
NOISY_LOGGERS = ("pymongo", "pymongo.command", "pymongo.connection", "asyncio")
