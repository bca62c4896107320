"""Error types raised by logsink.

Only InvalidLevel originates in a sink. UnknownSink is raised by the
dispatcher when a query is routed to an identifier it does not hold.
"""

from __future__ import annotations

from typing import Any


class LogSinkError(Exception):
    """Base class for logsink errors."""


class InvalidLevel(LogSinkError, ValueError):
    """An unrecognized severity was supplied to a sink or dispatcher."""

    def __init__(self, level: Any) -> None:
        self.level = level
        super().__init__(
            f"Unknown severity: {level!r}. "
            f"Available: debug, info, notice, warning, error, critical, alert, emergency."
        )


class UnknownSink(LogSinkError, KeyError):
    """No sink is installed under the given identifier."""

    def __init__(self, sink_id: str) -> None:
        self.sink_id = sink_id
        super().__init__(sink_id)

    def __str__(self) -> str:
        return f"No sink installed as {self.sink_id!r}"
