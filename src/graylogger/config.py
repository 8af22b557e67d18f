"""
Graylogger Configuration.

The settings record is read-only to the logger. Values come from keyword
arguments, `GRAYLOG_*` environment variables or a `.env` file.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError
from .levels import LogLevel, validate_level

# Maximum amount of time, in seconds, the liveness probe waits for a connection.
DEFAULT_TIMEOUT = 0.1


class Transport(str, Enum):
    TCP = "tcp"
    UDP = "udp"


class GrayloggerSettings(BaseSettings):
    """Logger and Graylog endpoint configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GRAYLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    host: str = Field(default="", description="Host name of the Graylog server")
    port: int = Field(default=0, description="Port number of the Graylog server")
    provider: str = Field(default="", description="Name of the service that sends the messages")
    protocol: str = Field(default="", description="Transport protocol (tcp, udp)")
    timeout: float = Field(default=DEFAULT_TIMEOUT, description="Liveness probe timeout in seconds")

    env: str = Field(default="", description="Environment of the service: dev / test / prod")
    level: str = Field(default=LogLevel.DEBUG.value, description="Minimum level (debug, info, warning, error, fatal)")
    color: bool = Field(
        default=False,
        description="Colored output. Useful during development, keep it off in production.",
    )

    @field_validator("timeout")
    @classmethod
    def _default_timeout(cls, value: float) -> float:
        return value if value > 0 else DEFAULT_TIMEOUT

    @field_validator("protocol", "level", mode="before")
    @classmethod
    def _enum_to_value(cls, value: object) -> object:
        if isinstance(value, Enum):
            return value.value
        return value

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def is_remote_complete(self) -> bool:
        """All fields needed to ship GELF messages are set."""
        return bool(self.host and self.port and self.provider and self.protocol)

    def validate_level(self) -> None:
        validate_level(self.level)

    def validate_transport(self) -> None:
        if self.protocol not in {t.value for t in Transport}:
            raise ConfigurationError(
                f"invalid transport protocol given: {self.protocol}",
                field="protocol",
                value=self.protocol,
            )
