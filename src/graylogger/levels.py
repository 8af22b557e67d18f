"""
Severity levels and the per-level activation policy.

Ordinals follow syslog numbering, so the gaps between them are real:
debug=7, info=6, warning=4, error=3, fatal=2.
"""

from __future__ import annotations

from enum import Enum, IntEnum

from .errors import ConfigurationError


class Severity(IntEnum):
    DEBUG = 7
    INFO = 6
    WARNING = 4
    ERROR = 3
    FATAL = 2


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"


_BY_NAME = {level.value: Severity[level.name] for level in LogLevel}
_BY_ORDINAL = {severity.value: LogLevel[severity.name].value for severity in Severity}

# Ordinal stored by a logger whose output has been discarded.
DISABLED = 0


def to_ordinal(name: str | LogLevel) -> int:
    """Convert a level name to its ordinal.

    For example:
        debug -> 7
        info -> 6
    Unknown names fall back to debug.
    """
    if isinstance(name, LogLevel):
        name = name.value
    return _BY_NAME.get(str(name).lower(), Severity.DEBUG).value


def to_name(ordinal: int) -> str:
    """Convert an ordinal to its level name; unknown ordinals give "debug"."""
    return _BY_ORDINAL.get(ordinal, LogLevel.DEBUG.value)


def validate_level(name: str | LogLevel) -> None:
    if isinstance(name, LogLevel):
        return
    if str(name).lower() not in _BY_NAME:
        raise ConfigurationError(f"invalid logging level given: {name}", field="level", value=name)


def is_active(severity: Severity | int, minimum: int) -> bool:
    """Tell whether ``severity`` is routed to a real sink for ``minimum``.

    Fatal is active whenever any level is enabled.
    """
    if minimum == DISABLED:
        return False
    if severity == Severity.FATAL:
        return True
    return int(severity) <= minimum


def active_levels(minimum: int) -> frozenset[Severity]:
    """Return the severities that are written for the configured minimum ordinal."""
    return frozenset(severity for severity in Severity if is_active(severity, minimum))
