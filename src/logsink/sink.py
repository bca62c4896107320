"""Capture sink: a severity-gated, queryable buffer of log events.

Lifecycle:
    1. Installed with an initial threshold (CaptureSink("info"))
    2. handle_event() admits events at or above the threshold, counts the rest
    3. Tests query it: count, count_ignored, pop (oldest first), flush,
       get_level / set_level
    4. terminate() on removal

The admission decision is taken once, on arrival. Changing the threshold
later never reclassifies buffered or already-ignored events.

A sink must never break the dispatch chain, so handle_event() does not
raise: anything that is not a LogEvent is dropped.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any

from logsink.events import (
    Count,
    CountIgnored,
    Flush,
    GetLevel,
    LogEvent,
    Pop,
    SetLevel,
)
from logsink.logging import get_logger
from logsink.severity import Severity, parse_level

# Reply to queries that carry no data, and to queries the sink does not know.
ACK = "ok"


def _get_logger():
    return get_logger("logsink.sink")


@dataclass
class SinkState:
    """Everything a capture sink holds."""

    threshold: Severity
    admitted: deque[LogEvent] = field(default_factory=deque)
    ignored: int = 0


class CaptureSink:
    """Buffers admitted LogEvents in arrival order for later assertions."""

    def __init__(self, level: Severity | str) -> None:
        self.state = SinkState(threshold=parse_level(level))

    def __repr__(self) -> str:
        return (
            f"CaptureSink(level={self.get_level()!r}, "
            f"count={self.count()}, ignored={self.count_ignored()})"
        )

    # -- Event entry point --

    def handle_event(self, event: Any) -> None:
        if not isinstance(event, LogEvent) or not isinstance(event.level, Severity):
            _get_logger().debug("sink.event.dropped", event_type=type(event).__name__)
            return
        if event.level >= self.state.threshold:
            self.state.admitted.append(event)
        else:
            self.state.ignored += 1

    # -- Queries --

    def count(self) -> int:
        return len(self.state.admitted)

    def count_ignored(self) -> int:
        return self.state.ignored

    def pop(self) -> LogEvent | None:
        """Remove and return the oldest admitted event, or None when empty."""
        if not self.state.admitted:
            return None
        return self.state.admitted.popleft()

    def flush(self) -> None:
        self.state.admitted.clear()
        self.state.ignored = 0

    def get_level(self) -> str:
        return self.state.threshold.label

    def set_level(self, level: Severity | str) -> None:
        # Parse before assigning so a bad level leaves the threshold as it was
        self.state.threshold = parse_level(level)

    def handle_call(self, query: Any) -> Any:
        """Answer one query message. Unknown queries are acknowledged."""
        if isinstance(query, Count):
            return self.count()
        if isinstance(query, CountIgnored):
            return self.count_ignored()
        if isinstance(query, Pop):
            return self.pop()
        if isinstance(query, Flush):
            self.flush()
            return ACK
        if isinstance(query, GetLevel):
            return self.get_level()
        if isinstance(query, SetLevel):
            self.set_level(query.level)
            return ACK
        return ACK

    def terminate(self) -> None:
        self.flush()
