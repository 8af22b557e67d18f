"""
Text line formatting and color utilities.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .levels import Severity
from .prettify import prettify_key_val, render
from .tracking import TrackInfo

COLORS = {
    "reset": "\033[0m",
    "red": "\033[91m",
    "green": "\033[32m",
    "yellow": "\033[93m",
    "blue": "\033[34m",
    "purple": "\033[95m",
    "gray": "\033[90m",
}

LEVEL_COLORS = {
    Severity.DEBUG: "green",
    Severity.INFO: "blue",
    Severity.WARNING: "purple",
    Severity.ERROR: "red",
    Severity.FATAL: "yellow",
}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


def color_out(text: str, color: str, use_color: bool) -> str:
    """Colorize only when colored output is turned on."""
    if not use_color:
        return text
    return colorize(text, color)


def level_prefix(severity: Severity, use_color: bool) -> str:
    """E.g. "[WARNING] ", colored per level."""
    return color_out(f"[{severity.name}] ", LEVEL_COLORS[severity], use_color)


def format_track(tr: TrackInfo) -> str:
    return f"[file: {tr.file} line: {tr.line} function: {tr.function}]"


def format_log_line(tr: TrackInfo, pairs: Iterable[tuple[Any, Any]], use_color: bool = False) -> str:
    """Provide a formatted log line.

    For example:
        [file: example.py line: 39 function: __main__.main] [Debug :: 10]
    The timestamp and level prefix are added by the level writer.
    """
    rendered = [
        f"[{prettify_key_val([render(key).human, render(value).human])}]" for key, value in pairs
    ]
    return " ".join([color_out(format_track(tr), "gray", use_color), *rendered])
