"""Persisted log destinations.

A logger writes every uncolored line to a single ``FanOutWriter`` built from
the writers handed to it at construction. The set is fixed for the lifetime
of the logger.
"""
from __future__ import annotations
from typing import Any, Iterable, Protocol, Tuple

from ..logutil import get_logger


class Writer(Protocol):  # pragma: no cover - simple protocol
    def write(self, text: str) -> Any: ...  # noqa: D401,E701 - protocol stub


class FanOutWriter:
    def __init__(self, writers: Iterable[Writer] = ()) -> None:
        self._writers: Tuple[Writer, ...] = tuple(writers)

    @property
    def writers(self) -> Tuple[Writer, ...]:
        return self._writers

    def write(self, text: str) -> None:
        """Write ``text`` to every writer and flush it before returning.

        Best effort: a writer that fails is reported on the diagnostic logger
        and skipped; the remaining writers still get the text.
        """
        for w in self._writers:
            try:
                w.write(text)
                flush = getattr(w, "flush", None)
                if flush is not None:
                    flush()
            except Exception as exc:  # noqa: BLE001 - one bad writer must not starve the rest
                get_logger("sinks").warning("log destination %r failed: %s", w, exc)

    def __len__(self) -> int:
        return len(self._writers)

    def __repr__(self) -> str:
        return f"FanOutWriter({list(self._writers)!r})"


__all__ = ["Writer", "FanOutWriter"]
