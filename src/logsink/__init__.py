"""logsink: a severity-gated, queryable capture sink for testing logging.

Public API:
    CaptureSink       — buffers admitted LogEvents, counts ignored ones
    Dispatcher        — installs sinks, notify(event) / call(sink_id, query)
    SinkClient        — count, count_ignored, pop, flush, get/set_level
    Logger            — producer front-end, one method per severity
    DispatchHandler   — stdlib logging bridge
    capturing()       — test helper yielding a SinkClient

Lines follow ``"[<level>] <origin> <text>"``; see logsink.formatter.
"""

from logsink.client import SinkClient
from logsink.config import DispatcherConfig, LoggingConfig, parse_handlers
from logsink.dispatcher import Dispatcher
from logsink.errors import InvalidLevel, LogSinkError, UnknownSink
from logsink.events import (
    Count,
    CountIgnored,
    Flush,
    GetLevel,
    LevelChanged,
    LogEvent,
    Pop,
    SetLevel,
    SinkInstalled,
    SinkRemoved,
)
from logsink.formatter import (
    ApplicationExit,
    ApplicationStarted,
    CrashReport,
    SupervisorBridgeExit,
    SupervisorChildExit,
    SupervisorProgress,
    format_line,
    render_report,
    render_text,
)
from logsink.logger import DispatchHandler, Logger
from logsink.logging import get_logger, setup_logging, shutdown_logging
from logsink.severity import Severity, from_stdlib, level_to_num, num_to_level
from logsink.sink import ACK, CaptureSink, SinkState
from logsink.testing import capturing

__all__ = [
    # Sink
    "ACK",
    "CaptureSink",
    "SinkState",
    # Severity
    "Severity",
    "level_to_num",
    "num_to_level",
    "from_stdlib",
    # Events and queries
    "LogEvent",
    "SinkInstalled",
    "SinkRemoved",
    "LevelChanged",
    "Count",
    "CountIgnored",
    "Pop",
    "Flush",
    "GetLevel",
    "SetLevel",
    # Dispatch
    "Dispatcher",
    "DispatcherConfig",
    "SinkClient",
    "parse_handlers",
    # Producers
    "Logger",
    "DispatchHandler",
    # Formatting
    "format_line",
    "render_text",
    "render_report",
    "CrashReport",
    "SupervisorChildExit",
    "SupervisorBridgeExit",
    "SupervisorProgress",
    "ApplicationExit",
    "ApplicationStarted",
    # Errors
    "LogSinkError",
    "InvalidLevel",
    "UnknownSink",
    # Diagnostics logging
    "LoggingConfig",
    "setup_logging",
    "get_logger",
    "shutdown_logging",
    # Testing
    "capturing",
]
