"""
The GrayLogger facade.

Every level-named call writes one formatted line to the level's text writer
and then, when the endpoint is configured, reachable and output is allowed,
sends one GELF message per key/value pair to Graylog.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, TextIO

from .config import GrayloggerSettings
from .errors import ConfigurationError, GrayloggerError
from .formatters import format_log_line
from .gelf import encode
from .levels import DISABLED, Severity, is_active, to_ordinal
from .prettify import key_value_pairs, prettify_key_val, render
from .sinks import SinkRegistry
from .tracking import TrackInfo, track
from .transport import GelfTransport

COULD_NOT_CONNECT = "could not connect to remote host with initialized data"

# Frames between `_dispatch` and the user's code: _dispatch -> public method -> user.
_USER_FRAME = 2


def tracking(skip: int = 0) -> TrackInfo:
    """Call-site information of the caller; each `skip` goes one frame further up."""
    return track(skip + 1)


class GrayLogger:
    """Level-gated text logger that also ships GELF messages to Graylog.

    Args:
        settings: Logger configuration (loaded from the environment when omitted)
        stream: Text output for active levels (default: sys.stdout)
        abort: Called with exit status 1 by `fatal` (default: sys.exit)
    """

    def __init__(
        self,
        settings: GrayloggerSettings | None = None,
        *,
        stream: TextIO | None = None,
        abort: Callable[[int], Any] = sys.exit,
    ) -> None:
        self._settings = settings if settings is not None else GrayloggerSettings()
        self._stream = stream
        self._abort = abort
        self._level = to_ordinal(self._settings.level)
        self._sinks = SinkRegistry(use_color=self._settings.color)
        self._sinks.configure(self._level, self._output())
        self._transport = GelfTransport(self._settings)
        self._capture_path: Path | None = None
        self._capture_file: TextIO | None = None

        if self._settings.is_remote_complete():
            try:
                self._settings.validate_level()
                self._settings.validate_transport()
            except ConfigurationError as err:
                self.fatal(err)

    def _output(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _dispatch(self, severity: Severity, keys_and_values: Sequence[Any]) -> None:
        pairs = key_value_pairs(keys_and_values)
        tr = track(_USER_FRAME)
        self._sinks.println(severity, format_log_line(tr, pairs, self._settings.color))
        self._send(severity, pairs, tr)

    def _remote_allowed(self, severity: Severity) -> bool:
        return (
            self._settings.is_remote_complete()
            and self._sinks.is_allowed()
            and is_active(severity, self._level)
        )

    def _send(self, severity: Severity, pairs: list[tuple[Any, Any]], tr: TrackInfo) -> None:
        if not pairs or not self._remote_allowed(severity):
            return
        if not self._transport.is_alive():
            line = format_log_line(tr, [(COULD_NOT_CONNECT, self._settings)], self._settings.color)
            self._sinks.println(Severity.WARNING, line)
            return
        for key, value in pairs:
            self._transport.send(encode(severity, tr, key, value, self._settings))

    def send_gelf(self, severity: Severity | int, *keys_and_values: Any) -> None:
        """Send GELF messages to Graylog without writing a text line.

        ``severity`` may be a plain ordinal, e.g. 6 for info.
        """
        self._send(Severity(severity), key_value_pairs(keys_and_values), track(1))

    # =========================================================================
    # Level calls
    # =========================================================================

    def debug(self, *keys_and_values: Any) -> None:
        """Fine-grained events, most useful to debug an application."""
        self._dispatch(Severity.DEBUG, keys_and_values)

    def info(self, *keys_and_values: Any) -> None:
        """Progress of the application at a coarse-grained level."""
        self._dispatch(Severity.INFO, keys_and_values)

    def warning(self, *keys_and_values: Any) -> None:
        """Potentially harmful situations."""
        self._dispatch(Severity.WARNING, keys_and_values)

    def error(self, *keys_and_values: Any) -> None:
        """Error events that might still allow the application to continue running."""
        self._dispatch(Severity.ERROR, keys_and_values)

    def log_warning_if_err(self, err: BaseException | None) -> None:
        """Log ``err`` at warning level, keyed by the calling function's name."""
        if err is not None:
            self._dispatch(Severity.WARNING, (track(1).function, err))

    def log_error_if_err(self, err: BaseException | None) -> None:
        """Log ``err`` at error level, keyed by the calling function's name."""
        if err is not None:
            self._dispatch(Severity.ERROR, (track(1).function, err))

    def fatal(self, err: BaseException | None) -> None:
        """Log ``err`` and terminate the process with exit status 1.

        Nothing happens when ``err`` is None.
        """
        if err is not None:
            self._dispatch(Severity.FATAL, (track(1).function, err))
            self._abort(1)

    def return_with_error(self, *keys_and_values: Any) -> GrayloggerError:
        """Log at error level and return the same message as an error."""
        self._dispatch(Severity.ERROR, keys_and_values)
        message = prettify_key_val([render(item).human for item in keys_and_values])
        return GrayloggerError(message, code="LOGGED_ERROR", details={"pairs": len(keys_and_values) // 2})

    # =========================================================================
    # State
    # =========================================================================

    @property
    def settings(self) -> GrayloggerSettings:
        """The settings the logger was initialized with."""
        return self._settings

    def get_log_level(self) -> tuple[int, str]:
        return to_ordinal(self._settings.level), self._settings.level

    def is_allowed_output(self) -> bool:
        """Tell whether any level still writes, i.e. output has not been discarded."""
        return self._sinks.is_allowed()

    def discard_output(self) -> None:
        """Discard all level outputs and stop sending messages to Graylog."""
        self._sinks.discard()
        self._level = DISABLED

    def reset_logger(self) -> GrayLogger:
        """Return a new logger built from the initial settings."""
        return GrayLogger(self._settings, stream=self._stream, abort=self._abort)

    # =========================================================================
    # Output capture
    # =========================================================================

    def capture_output(self, file_name: str | Path) -> GrayLogger:
        """Redirect the output of active levels to ``file_name``, truncating it first."""
        self._close_capture()
        path = Path(file_name)
        path.unlink(missing_ok=True)
        self._capture_path = path
        self._capture_file = path.open("a", encoding="utf-8")
        self._sinks.configure(self._level, self._capture_file)
        return self

    def save_output(self) -> None:
        """Close the capture file and write to the original stream again."""
        self._close_capture()
        self._sinks.configure(self._level, self._output())

    def _close_capture(self) -> None:
        if self._capture_file is not None:
            self._capture_file.close()
            self._capture_file = None

    def get_output(self) -> str:
        """Content of the file set by `capture_output`."""
        if self._capture_path is None or not self._capture_path.exists():
            return ""
        return self._capture_path.read_text(encoding="utf-8")

    def print_output(self) -> None:
        print(self.get_output().removesuffix("\n"), file=self._output())
