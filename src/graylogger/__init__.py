"""
Graylogger: level-gated text logging with GELF shipping to Graylog.

Each call such as `logger.info("key", value)` is written as a human readable
line with its call site, and sent to Graylog as one GELF message per
key/value pair when a remote endpoint is configured and reachable.

Library: structlog for the level writers, orjson for JSON rendering,
pydantic-settings for configuration.
"""

from .config import GrayloggerSettings, Transport
from .errors import ConfigurationError, GrayloggerError, KeyValueError
from .gelf import GelfMessage
from .levels import LogLevel, Severity
from .logger import GrayLogger, tracking
from .tracking import TrackInfo

__all__ = [
    "ConfigurationError",
    "GelfMessage",
    "GrayLogger",
    "GrayloggerError",
    "GrayloggerSettings",
    "KeyValueError",
    "LogLevel",
    "Severity",
    "TrackInfo",
    "Transport",
    "tracking",
]
