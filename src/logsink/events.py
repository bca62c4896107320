"""Typed event and query dataclasses.

All are frozen (immutable). The dispatcher emits log events and its own
notices on one channel; sinks keep LogEvent and ignore the rest.
Queries travel the other way, from callers to a single sink.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from logsink.severity import Severity

# ---------------------------------------------------------------------------
# Log events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LogEvent:
    level: Severity
    timestamp: datetime
    message: str  # already formatted, "[level] origin text"


# ---------------------------------------------------------------------------
# Dispatcher notices
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SinkInstalled:
    sink_id: str
    level: Severity


@dataclass(frozen=True)
class SinkRemoved:
    sink_id: str


@dataclass(frozen=True)
class LevelChanged:
    sink_id: str
    level: Severity


# Every type the dispatcher puts on the channel. Sinks subscribe to all of them.
DISPATCHED_EVENTS = (
    LogEvent,
    SinkInstalled,
    SinkRemoved,
    LevelChanged,
)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Count:
    pass


@dataclass(frozen=True)
class CountIgnored:
    pass


@dataclass(frozen=True)
class Pop:
    pass


@dataclass(frozen=True)
class Flush:
    pass


@dataclass(frozen=True)
class GetLevel:
    pass


@dataclass(frozen=True)
class SetLevel:
    level: Severity | str
