"""Producers: a severity-per-method Logger and a stdlib logging bridge.

Both build ``"[<level>] <origin> <text>"`` lines and push them as LogEvents
through a Dispatcher. Neither waits for the sinks.

    log = Logger(dispatcher)
    log.warning("disk %s at %d%%", "/var", 91)
    log.report(Severity.ERROR, CrashReport("crash", "bad return value: bleh"))

    logging.getLogger().addHandler(DispatchHandler(dispatcher))
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Callable

from logsink.events import LogEvent
from logsink.formatter import format_line, render_report, render_text
from logsink.severity import Severity, from_stdlib, parse_level

if TYPE_CHECKING:
    from logsink.dispatcher import Dispatcher


class Logger:
    """Front-end producing formatted LogEvents.

    ``origin`` names the producer in every line. When omitted, the caller's
    ``module:function:line`` is used, which never contains a space.
    """

    def __init__(self, dispatcher: Dispatcher, origin: str | None = None) -> None:
        self.dispatcher = dispatcher
        self.origin = origin

    def log(self, level: Severity | str, fmt: str, *args: Any) -> None:
        self._emit(parse_level(level), lambda: render_text(fmt, args))

    def debug(self, fmt: str, *args: Any) -> None:
        self._emit(Severity.DEBUG, lambda: render_text(fmt, args))

    def info(self, fmt: str, *args: Any) -> None:
        self._emit(Severity.INFO, lambda: render_text(fmt, args))

    def notice(self, fmt: str, *args: Any) -> None:
        self._emit(Severity.NOTICE, lambda: render_text(fmt, args))

    def warning(self, fmt: str, *args: Any) -> None:
        self._emit(Severity.WARNING, lambda: render_text(fmt, args))

    def error(self, fmt: str, *args: Any) -> None:
        self._emit(Severity.ERROR, lambda: render_text(fmt, args))

    def critical(self, fmt: str, *args: Any) -> None:
        self._emit(Severity.CRITICAL, lambda: render_text(fmt, args))

    def alert(self, fmt: str, *args: Any) -> None:
        self._emit(Severity.ALERT, lambda: render_text(fmt, args))

    def emergency(self, fmt: str, *args: Any) -> None:
        self._emit(Severity.EMERGENCY, lambda: render_text(fmt, args))

    def report(self, level: Severity | str, report: Any) -> None:
        """Log a structured report (see logsink.formatter) at ``level``."""
        self._emit(parse_level(level), lambda: render_report(report))

    def _emit(self, level: Severity, render: Callable[[], str]) -> None:
        # Skip rendering entirely when no sink could admit the event
        if not self.dispatcher.enabled_for(level):
            return
        origin = self.origin or _caller_location(sys._getframe(2))
        message = format_line(level, origin, render())
        self.dispatcher.notify(
            LogEvent(level=level, timestamp=datetime.now(UTC), message=message)
        )


def _caller_location(frame: Any) -> str:
    module = frame.f_globals.get("__name__", "?")
    return f"{module}:{frame.f_code.co_name}:{frame.f_lineno}"


class DispatchHandler(logging.Handler):
    """Forward stdlib log records into a Dispatcher as LogEvents.

    The origin is the record's logger name; the text is the rendered
    record message.
    """

    def __init__(self, dispatcher: Dispatcher, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.dispatcher = dispatcher

    def emit(self, record: logging.LogRecord) -> None:
        try:
            severity = from_stdlib(record.levelno)
            if not self.dispatcher.enabled_for(severity):
                return
            origin = record.name or "root"
            message = format_line(severity, origin, record.getMessage())
            self.dispatcher.notify(
                LogEvent(
                    level=severity,
                    timestamp=datetime.fromtimestamp(record.created, UTC),
                    message=message,
                )
            )
        except Exception:
            self.handleError(record)
