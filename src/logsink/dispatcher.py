"""Dispatcher: install capture sinks, push events to them, route queries.

One pyventus EventEmitter per dispatcher, bound to its own linker and to
an ExecutorProcessingService over a single worker thread. Every emission
and every query is a task on that worker, so:

    notify(event)        — fire-and-forget; returns before sinks run
    call(sink_id, query) — blocks until the worker has handled every event
                           notified before it, then the query

Sinks never need locking; the worker serializes them.

The dispatcher also keeps its own minimum level (the lowest threshold of
any installed sink). Log events below it are dropped before any sink sees
them, and producers check enabled_for() before formatting.

Configuration is explicit:
    Dispatcher(DispatcherConfig(handlers=[("capture", ["info"])]))
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from pyventus.core.processing.executor import ExecutorProcessingService
from pyventus.events import EventEmitter

from logsink.config import DispatcherConfig
from logsink.errors import UnknownSink
from logsink.events import (
    DISPATCHED_EVENTS,
    GetLevel,
    LevelChanged,
    LogEvent,
    SetLevel,
    SinkInstalled,
    SinkRemoved,
)
from logsink.linker import new_linker
from logsink.logging import get_logger
from logsink.severity import Severity, parse_level
from logsink.sink import CaptureSink


def _get_logger():
    return get_logger("logsink.dispatcher")


class Dispatcher:
    """Event-distribution layer for capture sinks."""

    def __init__(self, config: DispatcherConfig | None = None) -> None:
        self.config = config or DispatcherConfig()
        self._lock = threading.Lock()
        self._sinks: dict[str, CaptureSink] = {}
        self._subscribers: dict[str, Any] = {}
        self._levels: dict[str, Severity] = {}
        self._min_level: Severity | None = None
        self._closed = False

        self._linker = new_linker()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="logsink")
        self._emitter = EventEmitter(
            event_linker=self._linker,
            event_processor=ExecutorProcessingService(self._executor),
        )

        try:
            for sink_id, args in self.config.handlers:
                if len(args) != 1:
                    raise ValueError(
                        f"Handler {sink_id!r} expects exactly one argument "
                        f"(the initial level), got {args!r}"
                    )
                self.add_sink(sink_id, args[0])
        except Exception:
            self.shutdown()
            raise

    def __enter__(self) -> Dispatcher:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.shutdown()

    # -- Registration --

    def add_sink(self, sink_id: str, level: Severity | str) -> CaptureSink:
        """Install a capture sink under ``sink_id`` with an initial threshold."""
        self._check_open()
        sink = CaptureSink(level)
        with self._lock:
            if sink_id in self._sinks:
                raise ValueError(f"A sink is already installed as {sink_id!r}")
            self._subscribers[sink_id] = self._linker.subscribe(
                *DISPATCHED_EVENTS, event_callback=sink.handle_event
            )
            self._sinks[sink_id] = sink
            self._levels[sink_id] = sink.state.threshold
            self._recompute_min_level()

        _get_logger().debug("sink.installed", sink_id=sink_id, threshold=sink.get_level())
        self._emitter.emit(SinkInstalled(sink_id=sink_id, level=sink.state.threshold))
        return sink

    def remove_sink(self, sink_id: str) -> None:
        self._check_open()
        with self._lock:
            sink = self._sinks.pop(sink_id, None)
            if sink is None:
                raise UnknownSink(sink_id)
            self._linker.remove_subscriber(self._subscribers.pop(sink_id))
            del self._levels[sink_id]
            self._recompute_min_level()

        # Terminate on the worker, after any events already queued for it
        self._executor.submit(sink.terminate).result(self.config.call_timeout)
        _get_logger().debug("sink.removed", sink_id=sink_id)
        self._emitter.emit(SinkRemoved(sink_id=sink_id))

    def sink_ids(self) -> list[str]:
        with self._lock:
            return list(self._sinks)

    # -- Events --

    def notify(self, event: Any) -> None:
        """Push an event to every sink without waiting.

        Only the dispatched event types go on the channel; anything else is
        dropped. No-op after shutdown, including a shutdown that lands
        between the closed check and the emit.
        """
        if self._closed:
            return
        if not isinstance(event, DISPATCHED_EVENTS):
            _get_logger().debug("dispatcher.event.dropped", event_type=type(event).__name__)
            return
        if isinstance(event, LogEvent) and isinstance(event.level, Severity):
            if not self.enabled_for(event.level):
                return
        try:
            self._emitter.emit(event)
        except RuntimeError:
            # Executor shut down underneath us
            _get_logger().debug(
                "dispatcher.event.dropped", event_type=type(event).__name__, reason="shutdown"
            )

    @property
    def min_level(self) -> Severity | None:
        return self._min_level

    def enabled_for(self, level: Severity | str) -> bool:
        """True if at least one sink could admit an event at ``level``."""
        floor = self._min_level
        return floor is not None and parse_level(level) >= floor

    def set_min_level(self, level: Severity | str) -> None:
        """Override the minimum level until the next sink or level change."""
        self._min_level = parse_level(level)

    def _recompute_min_level(self) -> None:
        self._min_level = min(self._levels.values(), default=None)

    # -- Queries --

    def call(self, sink_id: str, query: Any, timeout: float | None = None) -> Any:
        """Run ``query`` on the sink's worker and return its reply.

        Raises UnknownSink, the sink's own InvalidLevel, or TimeoutError
        if the reply takes longer than ``timeout`` (default from config).
        A successful SetLevel also emits a LevelChanged notice.
        """
        self._check_open()
        with self._lock:
            sink = self._sinks.get(sink_id)
        if sink is None:
            raise UnknownSink(sink_id)

        wait = self.config.call_timeout if timeout is None else timeout
        reply = self._executor.submit(sink.handle_call, query).result(wait)

        if isinstance(query, SetLevel):
            level = parse_level(query.level)
            with self._lock:
                if sink_id in self._levels:
                    self._levels[sink_id] = level
                    self._recompute_min_level()
            self._emitter.emit(LevelChanged(sink_id=sink_id, level=level))
        return reply

    def get_level(self, sink_id: str) -> str:
        return self.call(sink_id, GetLevel())

    def set_level(self, sink_id: str, level: Severity | str) -> None:
        self.call(sink_id, SetLevel(level))

    # -- Teardown --

    def shutdown(self) -> None:
        """Drain queued work, terminate every sink, drop all subscriptions."""
        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=True)
        with self._lock:
            sinks = list(self._sinks.values())
            self._sinks.clear()
            self._subscribers.clear()
            self._levels.clear()
            self._min_level = None
        for sink in sinks:
            sink.terminate()
        self._linker.remove_all()
        _get_logger().debug("dispatcher.shutdown", sinks=len(sinks))

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("Dispatcher has been shut down")
