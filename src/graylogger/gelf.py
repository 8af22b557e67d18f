"""
GELF message assembly.

One message is built per key/value pair. Extra fields are flattened to
strings and prefixed with an underscore on the wire.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

import orjson
from pydantic import BaseModel, ConfigDict, Field

from .config import GrayloggerSettings
from .levels import Severity, to_name
from .prettify import prettify_key_val, render
from .tracking import TrackInfo

GELF_VERSION = "1.1"


@dataclass(frozen=True, slots=True)
class GelfExtraFields:
    """Extra GELF data sent along with every message."""

    env: str
    level: str
    key: str
    value: str
    line: str
    file: str
    function: str

    def as_pairs(self) -> list[tuple[str, str]]:
        return [
            ("log_env", self.env),
            ("log_level", self.level),
            ("log_key", self.key),
            ("log_value", self.value),
            ("track_line", self.line),
            ("track_file", self.file),
            ("track_function", self.function),
        ]


class GelfMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str = GELF_VERSION
    host: str
    short_message: str
    full_message: str
    timestamp: float
    level: int
    extra: dict[str, str] = Field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        payload = self.model_dump(exclude={"extra"})
        for name, value in self.extra.items():
            payload[f"_{name}"] = value
        return payload

    def to_bytes(self) -> bytes:
        """Newline free JSON document."""
        return orjson.dumps(self.to_payload())


def encode(
    severity: Severity,
    tr: TrackInfo,
    key: Any,
    value: Any,
    settings: GrayloggerSettings,
) -> GelfMessage:
    rendered_key = render(key)
    rendered_value = render(value)
    extra = GelfExtraFields(
        env=settings.env,
        level=to_name(severity),
        key=rendered_key.json,
        value=rendered_value.json,
        line=tr.line,
        file=tr.file,
        function=tr.function,
    )
    return GelfMessage(
        host=settings.provider,
        short_message=prettify_key_val([rendered_key.human, rendered_value.human]),
        full_message=prettify_key_val([rendered_key.json, rendered_value.json]),
        timestamp=time.time(),
        level=int(severity),
        extra=dict(extra.as_pairs()),
    )
