"""Severity levels and their integer ranks.

Ranks ascend with importance, so admission is a plain ``>=`` comparison
against a sink's threshold.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any

from logsink.errors import InvalidLevel


class Severity(IntEnum):
    """Totally ordered log severity. The member name is the symbolic level."""

    DEBUG = 0
    INFO = 1
    NOTICE = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5
    ALERT = 6
    EMERGENCY = 7

    @property
    def label(self) -> str:
        """Lowercase name as it appears in formatted lines, e.g. ``warning``."""
        return self.name.lower()

    def __str__(self) -> str:
        return self.label


def level_to_num(level: Any) -> int:
    """Rank of a Severity or a severity name; raises InvalidLevel otherwise."""
    return parse_level(level).value


def num_to_level(num: int) -> Severity:
    try:
        return Severity(num)
    except ValueError:
        raise InvalidLevel(num) from None


def parse_level(level: Any) -> Severity:
    """Coerce ``level`` to a Severity.

    Accepts Severity members and names ("warning", " WARNING ").
    Plain ints are rejected: a rank is not a level name.
    """
    if isinstance(level, Severity):
        return level
    if isinstance(level, str):
        try:
            return Severity[level.strip().upper()]
        except KeyError:
            raise InvalidLevel(level) from None
    raise InvalidLevel(level)


# stdlib levelno -> Severity, checked highest first
_STDLIB_LEVELS: tuple[tuple[int, Severity], ...] = (
    (logging.CRITICAL, Severity.CRITICAL),
    (logging.ERROR, Severity.ERROR),
    (logging.WARNING, Severity.WARNING),
    (logging.INFO, Severity.INFO),
)


def from_stdlib(levelno: int) -> Severity:
    """Map a stdlib logging level to a Severity, rounding down."""
    for threshold, severity in _STDLIB_LEVELS:
        if levelno >= threshold:
            return severity
    return Severity.DEBUG
