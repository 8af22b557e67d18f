"""
Per-level text writers and the registry that gates them.

Each severity owns a structlog logger writing prefixed, timestamped lines to
a stream. Levels below the configured minimum write to `NOP_FILE` instead,
so every call site stays the same whatever the level.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import structlog
from structlog.typing import EventDict, WrappedLogger

from .formatters import level_prefix
from .levels import Severity, is_active

TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"


class NopFile:
    def write(self, s: str) -> None:
        pass

    def flush(self) -> None:
        pass


NOP_FILE = NopFile()


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add a local `YYYY/MM/DD HH:MM:SS` timestamp to the event."""
    event_dict["timestamp"] = datetime.now().strftime(TIMESTAMP_FORMAT)
    return event_dict


class PrefixRenderer:
    """Render `<prefix><timestamp> <line>`."""

    def __init__(self, prefix: str) -> None:
        self._prefix = prefix

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        return f"{self._prefix}{event_dict['timestamp']} {event_dict['event']}"


class LevelWriter:
    """A named writer for one severity."""

    def __init__(self, severity: Severity, stream: Any = NOP_FILE, use_color: bool = False) -> None:
        self.severity = severity
        self.prefix = level_prefix(severity, use_color)
        self.set_output(stream)

    def set_output(self, stream: Any) -> None:
        # structlog keeps a write lock per stream in a module-level dict, so every
        # stream passed here stays referenced for the life of the process.
        if stream is getattr(self, "_stream", None):
            return
        self._stream = stream
        self._logger = structlog.wrap_logger(
            structlog.PrintLogger(file=stream),
            processors=[add_timestamp, PrefixRenderer(self.prefix)],
            wrapper_class=structlog.BoundLogger,
            context_class=dict,
            cache_logger_on_first_use=False,
        )

    @property
    def stream(self) -> Any:
        return self._stream

    @property
    def is_discarding(self) -> bool:
        return self._stream is NOP_FILE

    def println(self, line: str) -> None:
        self._logger.msg(line)


class SinkRegistry:
    """The five level writers of one logger instance.

    Reconfiguration is not synchronized with logging calls: callers that
    reconfigure from one thread while logging from others must serialize
    that themselves.
    """

    def __init__(self, use_color: bool = False) -> None:
        self._writers = {severity: LevelWriter(severity, NOP_FILE, use_color) for severity in Severity}

    def configure(self, minimum: int, stream: Any) -> None:
        """Route active levels to ``stream`` and the others to the no-op sink."""
        for severity, writer in self._writers.items():
            writer.set_output(stream if is_active(severity, minimum) else NOP_FILE)

    def set_output(self, stream: Any) -> None:
        """Redirect the levels that are not discarding to ``stream``."""
        for writer in self._writers.values():
            if not writer.is_discarding:
                writer.set_output(stream)

    def discard(self) -> None:
        for writer in self._writers.values():
            writer.set_output(NOP_FILE)

    def is_allowed(self) -> bool:
        """Tell whether any level still writes somewhere."""
        return any(not writer.is_discarding for writer in self._writers.values())

    def writer(self, severity: Severity) -> LevelWriter:
        return self._writers[severity]

    def println(self, severity: Severity, line: str) -> None:
        self._writers[severity].println(line)
