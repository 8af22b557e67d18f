"""
Call-site tracking.

`track(skip)` reports the file, line and function of a frame on the calling
thread's stack. `skip=0` is the function that called `track`; each extra
helper between the user's code and `track` adds one to `skip`.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from pathlib import PurePath

UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class TrackInfo:
    """File name, line number and function name of a caller."""

    file: str
    line: str
    function: str


def fetch_name_from_path(path: str) -> str:
    """Return the last component of a path."""
    return PurePath(path).name


def track(skip: int = 0) -> TrackInfo:
    frame = inspect.currentframe()
    try:
        frame = frame.f_back if frame is not None else None
        for _ in range(skip):
            if frame is None:
                break
            frame = frame.f_back
        if frame is None:
            return TrackInfo(file="", line="0", function=UNKNOWN)

        code = frame.f_code
        module = frame.f_globals.get("__name__", "")
        function = f"{module}.{code.co_qualname}" if module else code.co_qualname
        return TrackInfo(
            file=fetch_name_from_path(code.co_filename),
            line=str(frame.f_lineno),
            function=function,
        )
    finally:
        del frame
