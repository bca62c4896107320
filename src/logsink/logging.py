"""Diagnostics logging for logsink itself: formatter × destination.

This is the library's own structured logging (sink installed, event
dropped, dispatcher shut down). It is unrelated to the events a capture
sink buffers.

    formatter   how records are structured (structlog, stdlib)
    destination where output goes (stderr, JSONL file)

setup_logging(config) builds both by name, hands the formatter to the
handler the destination creates, and attaches that one handler to the root
logger. Handlers it did not create (pytest caplog, a DispatchHandler) are
left alone.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from logsink.config import LoggingConfig


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


class StructlogFormatter:
    """structlog processor chain rendered through the stdlib bridge."""

    def setup(self, config: LoggingConfig) -> logging.Formatter:
        import structlog

        shared_processors: list = [
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]

        if config.log_format == "console":
            renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
        else:
            renderer = structlog.processors.JSONRenderer()

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                *shared_processors,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        return structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )

    def get_logger(self, name: str) -> Any:
        import structlog

        return structlog.get_logger(name)


class StdlibFormatter:
    """Plain stdlib logging, JSON or console lines. structlog unused at runtime."""

    def setup(self, config: LoggingConfig) -> logging.Formatter:
        if config.log_format == "console":
            return logging.Formatter(
                "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        return _StdlibJsonFormatter()

    def get_logger(self, name: str) -> Any:
        return _StructuredStdlibLogger(logging.getLogger(name))


class _StdlibJsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        d: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%SZ"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        if hasattr(record, "_structured"):
            d.update(record._structured)  # type: ignore[union-attr]
        if record.exc_info and record.exc_info[1]:
            d["exception"] = self.formatException(record.exc_info)
        return json.dumps(d, default=str)


class _StructuredStdlibLogger:
    """Gives a stdlib logger the kwargs API used throughout logsink.

    The kwargs ride on the LogRecord as ``_structured`` for the JSON
    formatter to merge in.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def _log(self, level: int, event: str, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        record = self._logger.makeRecord(
            self._logger.name, level, "(unknown)", 0, event, (), None,
        )
        record._structured = kwargs  # type: ignore[attr-defined]
        self._logger.handle(record)

    def debug(self, event: str, **kw: Any) -> None:
        self._log(logging.DEBUG, event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._log(logging.INFO, event, **kw)


# ---------------------------------------------------------------------------
# Destinations
# ---------------------------------------------------------------------------


class StderrDestination:
    """Write to stderr. Default."""

    def __init__(self, config: LoggingConfig | None = None) -> None:
        pass

    def create_handler(self, formatter: logging.Formatter) -> logging.Handler:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        return handler

    def shutdown(self) -> None:
        pass


class JsonlFileDestination:
    """Append one JSON object per line to ``config.jsonl_path``."""

    def __init__(self, config: LoggingConfig) -> None:
        if not config.jsonl_path:
            raise ValueError("jsonl log destination requires LOGSINK_LOG_PATH")
        self._path = Path(config.jsonl_path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._handler: logging.Handler | None = None

    def create_handler(self, formatter: logging.Formatter) -> logging.Handler:
        handler = logging.FileHandler(str(self._path), mode="a", encoding="utf-8")
        handler.setFormatter(formatter)
        self._handler = handler
        return handler

    def shutdown(self) -> None:
        if self._handler is not None:
            self._handler.close()


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------

_FORMATTERS: dict[str, type] = {
    "structlog": StructlogFormatter,
    "stdlib": StdlibFormatter,
}

_DESTINATIONS: dict[str, type] = {
    "stderr": StderrDestination,
    "jsonl": JsonlFileDestination,
}


# ---------------------------------------------------------------------------
# Module state
# ---------------------------------------------------------------------------

_active_formatter: StructlogFormatter | StdlibFormatter | None = None
_active_destination: StderrDestination | JsonlFileDestination | None = None


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Resolve formatter and destination from config and wire the root logger."""
    global _active_formatter, _active_destination

    from logsink.config import LoggingConfig

    cfg = config or LoggingConfig()

    formatter_cls = _FORMATTERS.get(cfg.log_formatter)
    if formatter_cls is None:
        raise ValueError(
            f"Unknown log formatter: {cfg.log_formatter!r}. "
            f"Available: {list(_FORMATTERS)}."
        )

    dest_cls = _DESTINATIONS.get(cfg.log_destination)
    if dest_cls is None:
        raise ValueError(
            f"Unknown log destination: {cfg.log_destination!r}. "
            f"Available: {list(_DESTINATIONS)}."
        )

    formatter = formatter_cls()
    destination = dest_cls(cfg)

    handler = destination.create_handler(formatter.setup(cfg))
    handler._logsink_managed = True  # type: ignore[attr-defined]

    # Replace only our own handler from a previous setup
    _remove_managed_handlers()
    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, cfg.log_level.upper(), logging.INFO))

    if _active_destination is not None:
        _active_destination.shutdown()
    _active_formatter = formatter
    _active_destination = destination


def get_logger(name: str = "") -> Any:
    """Logger from the active formatter.

    Before setup_logging() this is a kwargs-tolerant stdlib wrapper, so
    module-level loggers work without any configuration.
    """
    if _active_formatter is not None:
        return _active_formatter.get_logger(name)
    return _StructuredStdlibLogger(logging.getLogger(name))


def shutdown_logging() -> None:
    """Close the active destination and detach its handler."""
    global _active_formatter, _active_destination

    if _active_destination is not None:
        _active_destination.shutdown()
    _remove_managed_handlers()
    _active_formatter = None
    _active_destination = None


def _remove_managed_handlers() -> None:
    root_logger = logging.getLogger()
    root_logger.handlers = [
        h for h in root_logger.handlers
        if not getattr(h, "_logsink_managed", False)
    ]
