"""Shared fixtures: a dispatcher with one capture sink, and its client.

Diagnostics logging is reset around every test so handlers installed by
setup_logging() never leak between cases.
"""

from __future__ import annotations

import pytest

from logsink.client import SinkClient
from logsink.config import DispatcherConfig
from logsink.dispatcher import Dispatcher
from logsink.logger import Logger

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_logging():
    from logsink.logging import shutdown_logging

    shutdown_logging()
    yield
    shutdown_logging()


@pytest.fixture()
def dispatcher():
    """Dispatcher with a single capture sink "capture" at info."""
    d = Dispatcher(DispatcherConfig(handlers=[("capture", ["info"])], call_timeout=5.0))
    yield d
    d.shutdown()


@pytest.fixture()
def client(dispatcher) -> SinkClient:
    return SinkClient(dispatcher, "capture")


@pytest.fixture()
def log(dispatcher) -> Logger:
    return Logger(dispatcher)
