"""SinkEventLinker: event namespace for logsink dispatchers.

pyventus keeps one subscriber registry per EventLinker subclass. Each
Dispatcher derives its own subclass, so two dispatchers in one process
never see each other's events.
"""

from __future__ import annotations

from itertools import count

from pyventus.events import EventLinker

_linker_ids = count(1)


class SinkEventLinker(EventLinker):
    """Base namespace for logsink events."""

    pass


def new_linker() -> type[SinkEventLinker]:
    """A fresh, isolated linker class for one dispatcher."""
    return type(f"SinkEventLinker{next(_linker_ids)}", (SinkEventLinker,), {})
