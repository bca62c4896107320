"""SinkClient: the query interface to one installed capture sink.

Each method is a single synchronous Dispatcher.call() routed by sink id,
so every reply reflects all events notified before the method was called.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from logsink.events import Count, CountIgnored, Flush, GetLevel, LogEvent, Pop, SetLevel
from logsink.severity import Severity

if TYPE_CHECKING:
    from logsink.dispatcher import Dispatcher
    from logsink.logger import Logger


class SinkClient:
    def __init__(
        self,
        dispatcher: Dispatcher,
        sink_id: str,
        logger: Logger | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.sink_id = sink_id
        self.logger = logger

    def __repr__(self) -> str:
        return f"SinkClient(sink_id={self.sink_id!r})"

    def count(self) -> int:
        return self.dispatcher.call(self.sink_id, Count())

    def count_ignored(self) -> int:
        return self.dispatcher.call(self.sink_id, CountIgnored())

    def pop(self) -> LogEvent | None:
        """Oldest buffered event, or None when the buffer is empty."""
        return self.dispatcher.call(self.sink_id, Pop())

    def pop_message(self) -> str | None:
        event = self.pop()
        return None if event is None else event.message

    def flush(self) -> None:
        self.dispatcher.call(self.sink_id, Flush())

    def get_level(self) -> str:
        return self.dispatcher.call(self.sink_id, GetLevel())

    def set_level(self, level: Severity | str) -> None:
        self.dispatcher.call(self.sink_id, SetLevel(level))
