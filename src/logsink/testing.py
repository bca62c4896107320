"""Test helper: a dispatcher with a single capture sink.

    with capturing("info") as logs:
        logs.logger.warning("disk full")
        assert logs.count() == 1
        assert logs.pop_message().endswith("disk full")
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from logsink.client import SinkClient
from logsink.config import DispatcherConfig
from logsink.dispatcher import Dispatcher
from logsink.logger import Logger
from logsink.severity import Severity


@contextmanager
def capturing(
    level: Severity | str = "info",
    sink_id: str = "capture",
    config: DispatcherConfig | None = None,
    origin: str | None = None,
) -> Iterator[SinkClient]:
    """Yield a SinkClient for a fresh sink; shut the dispatcher down on exit.

    ``config`` may carry more handlers and a call timeout; the capture sink
    is added on top of its handlers.
    """
    cfg = config or DispatcherConfig(handlers=[])
    dispatcher = Dispatcher(cfg)
    try:
        dispatcher.add_sink(sink_id, level)
        yield SinkClient(dispatcher, sink_id, logger=Logger(dispatcher, origin=origin))
    finally:
        dispatcher.shutdown()
