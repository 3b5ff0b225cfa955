"""Log severity levels.

The level set is closed, so per-level state (sequence counters) lives in a
small list indexed by ``Level`` rather than a mapping.
"""
from __future__ import annotations

from enum import IntEnum


class Level(IntEnum):
    INFO = 0
    WARNING = 1
    ERROR = 2
    FATAL = 3

    @property
    def letter(self) -> str:
        return _LETTERS[self]

    @property
    def color(self) -> str:
        """rich style name used when mirroring to a colorized stderr."""
        return _COLORS[self]


_LETTERS = {
    Level.INFO: "I",
    Level.WARNING: "W",
    Level.ERROR: "E",
    Level.FATAL: "FATAL",
}

# Rendered with the 16-color palette: green=32, yellow=33, red=31.
_COLORS = {
    Level.INFO: "green",
    Level.WARNING: "yellow",
    Level.ERROR: "red",
    Level.FATAL: "red",
}

LEVEL_NAMES = {lvl.name.lower(): lvl for lvl in Level}

__all__ = ["Level", "LEVEL_NAMES"]
