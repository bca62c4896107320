"""logsink configuration, env-var driven.

All settings have safe defaults. Nothing is read from global state at
dispatch time: a DispatcherConfig is handed to the Dispatcher constructor.

Logging architecture (the library's own diagnostics):
    formatter (how records are structured) × destination (where they go)

    Formatter: LOGSINK_LOG_FORMATTER=structlog (default) | stdlib
    Destination: LOGSINK_LOG_DESTINATION=stderr (default) | jsonl
    Renderer: LOGSINK_LOG_FORMAT=json (default) | console

Sink registration:
    LOGSINK_HANDLERS="capture:info,audit:error"
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

# (sink_id, [initial_level])
HandlerSpec = tuple[str, list[str]]


def parse_handlers(text: str | None) -> list[HandlerSpec]:
    """Parse ``"id:level,id:level"`` into handler specs.

    A bare id gets level "info". Blank entries are skipped. Levels are
    validated when the dispatcher installs the sink, not here.
    """
    if not text:
        return []
    specs: list[HandlerSpec] = []
    for entry in text.split(","):
        entry = entry.strip()
        if not entry:
            continue
        sink_id, _, level = entry.partition(":")
        sink_id = sink_id.strip()
        if not sink_id:
            raise ValueError(f"Handler entry without a sink id: {entry!r}")
        specs.append((sink_id, [level.strip() or "info"]))
    return specs


@dataclass
class LoggingConfig:
    """Diagnostics logging configuration, env-var driven."""

    log_formatter: str = field(
        default_factory=lambda: os.environ.get("LOGSINK_LOG_FORMATTER", "structlog")
    )  # "structlog" | "stdlib"

    log_destination: str = field(
        default_factory=lambda: os.environ.get("LOGSINK_LOG_DESTINATION", "stderr")
    )  # "stderr" | "jsonl"

    log_level: str = field(
        default_factory=lambda: os.environ.get("LOGSINK_LOG_LEVEL", "INFO")
    )

    log_format: str = field(
        default_factory=lambda: os.environ.get("LOGSINK_LOG_FORMAT", "json")
    )  # "json" | "console" (dev-friendly renderer)

    # JSONL file destination
    jsonl_path: str | None = field(
        default_factory=lambda: os.environ.get("LOGSINK_LOG_PATH")
    )


@dataclass
class DispatcherConfig:
    """Which sinks to install and how long callers wait on a query."""

    handlers: list[HandlerSpec] = field(
        default_factory=lambda: parse_handlers(os.environ.get("LOGSINK_HANDLERS"))
    )

    call_timeout: float | None = field(
        default_factory=lambda: float(os.environ.get("LOGSINK_CALL_TIMEOUT", "5.0"))
    )
