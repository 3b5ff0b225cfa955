"""Leveled logger core.

Every emitted line has the shape::

    [<timestamp> ]<prefix> <file>:<line>: <message>

where ``<prefix>`` is ``[FATAL]`` or ``[<I|W|E><NNNN>]``, ``NNNN`` being the
zero-padded count of earlier lines at that level on the same logger.
"""
from __future__ import annotations

import contextlib
import os
import sys
import threading
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from rich.color import ColorSystem
from rich.style import Style

from .levels import Level
from .logutil import get_logger
from .sinks import FanOutWriter, Writer

# Frames between ``Logger._emit`` and the code that called a public method.
DIRECT_CALLER_SKIP = 2
UNKNOWN_FILE = "unknown file"
# Grace period for a fatal line to reach the destination before the watchdog fires.
FATAL_FLUSH_TIMEOUT = 0.5
FLUSH_TIMEOUT_EXIT_CODE = 2


class FatalError(BaseException):
    """Raised by fatal-level calls once the line has been written.

    Derives from ``BaseException`` (like ``SystemExit``) so ordinary
    ``except Exception`` handlers let it through. Treat it as process ending:
    the watchdog started by the fatal call hard-exits the process if it is
    still running after ``FATAL_FLUSH_TIMEOUT`` seconds.
    """

    def __init__(self, line: str) -> None:
        super().__init__(line)
        self.line = line


def _safe(convert: Callable[[Any], str], obj: Any) -> str:
    try:
        return convert(obj)
    except Exception as exc:  # noqa: BLE001 - a broken operand must not break the log call
        return f"<unprintable {type(obj).__name__}: {type(exc).__name__}>"


def sprint(args: Sequence[Any]) -> str:
    """Join operands, adding a space between two adjacent non-string operands."""
    out: List[str] = []
    prev_is_str = True
    for i, arg in enumerate(args):
        is_str = isinstance(arg, str)
        if i and not is_str and not prev_is_str:
            out.append(" ")
        out.append(arg if is_str else _safe(str, arg))
        prev_is_str = is_str
    return "".join(out)


def sprintf(fmt: str, args: Tuple[Any, ...]) -> str:
    """%-format ``fmt``; mismatches degrade into the message instead of raising."""
    if not args:
        return fmt
    # Same convention as logging.LogRecord: a lone mapping feeds %(name)s fields.
    values: Any = args
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        values = args[0]
    try:
        return fmt % values
    except Exception as exc:  # noqa: BLE001 - degrade into the message, never raise
        shown = _safe(repr, args)
        get_logger("format").debug("bad format %r for args %s: %s", fmt, shown, exc)
        return f"{fmt} (format error: {exc}; args={shown})"


def timestamp() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S.%f %z %Z")


def _flush_timeout(line: str) -> None:
    msg = f"timeout waiting for fatal log to write to disk. Log message follows:\n{line}\n"
    # Raw fd write: sys.stderr may be the very stream that is stuck.
    with contextlib.suppress(OSError):
        os.write(2, msg.encode("utf-8", errors="replace"))
    os._exit(FLUSH_TIMEOUT_EXIT_CODE)


class Logger:
    """
    Thread-safe leveled logger writing to stderr and a fan-out of writers.

    One lock covers the whole gate, format, write and count sequence, so lines
    from concurrent callers never interleave and per-level counters stay exact.
    """

    def __init__(
        self,
        emit_to_stderr: bool,
        colorize: bool,
        include_timestamp: bool,
        *writers: Writer,
    ) -> None:
        self._counts: List[int] = [0] * len(Level)
        self._lock = threading.Lock()
        self._verbosity = 0
        self._default_verbosity = 0
        self._emit_to_stderr = emit_to_stderr
        self._colorize = colorize
        self._include_timestamp = include_timestamp
        self._destination = FanOutWriter(writers)
        # Raise by one for every forwarding layer between callers and this object.
        self.caller_skip = DIRECT_CALLER_SKIP
        # Style.render wraps the text in escape codes and leaves it untouched.
        self._styles: Optional[Dict[Level, Style]] = None
        if emit_to_stderr and colorize:
            self._styles = {lvl: Style.parse(lvl.color) for lvl in Level}

    def __repr__(self) -> str:
        return (
            f"Logger(stderr={self._emit_to_stderr}, colorize={self._colorize}, "
            f"timestamp={self._include_timestamp}, destination={self._destination!r})"
        )

    @property
    def destination(self) -> FanOutWriter:
        return self._destination

    @property
    def verbosity(self) -> int:
        with self._lock:
            return self._verbosity

    @property
    def default_verbosity(self) -> int:
        with self._lock:
            return self._default_verbosity

    def count(self, level: Level) -> int:
        """Number of lines emitted at ``level`` so far (always 0 for FATAL)."""
        with self._lock:
            return self._counts[Level(level)]

    def set_verbosity(self, v: int) -> None:
        """Drop every later call whose verbosity is above ``v``."""
        with self._lock:
            self._verbosity = v

    def set_default_verbosity(self, v: int) -> None:
        """Verbosity used by info/warning/error and their ``f`` forms from now on."""
        with self._lock:
            self._default_verbosity = v

    # Emission pipeline

    def _emit(self, verbosity: Optional[int], level: Level, args: Tuple[Any, ...], fmt: Optional[str] = None) -> None:
        # Public methods must call this directly; caller_skip counts on it.
        try:
            frame = sys._getframe(self.caller_skip)
            file, line = os.path.basename(frame.f_code.co_filename), frame.f_lineno
        except ValueError:
            file, line = UNKNOWN_FILE, 0
        with self._lock:
            if level is not Level.FATAL:
                if verbosity is None:
                    verbosity = self._default_verbosity
                if verbosity > self._verbosity:
                    return
            message = sprint(args) if fmt is None else sprintf(fmt, args)
            self._write(level, message, file, line)

    def _write(self, level: Level, message: str, file: str, line: int) -> None:
        if level is Level.FATAL:
            prefix = f"[{level.letter}]"
        else:
            prefix = f"[{level.letter}{self._counts[level]:04d}]"
        if self._include_timestamp:
            prefix = f"{timestamp()} {prefix}"
        text = f"{prefix} {file}:{line}: {message}"

        if self._emit_to_stderr:
            self._to_stderr(level, text)

        if level is Level.FATAL:
            self._start_watchdog(text)
            self._destination.write(text + "\n")
            raise FatalError(text)

        self._destination.write(text + "\n")
        self._counts[level] += 1

    def _to_stderr(self, level: Level, text: str) -> None:
        if self._styles is not None:
            text = self._styles[level].render(text, color_system=ColorSystem.STANDARD)
        try:
            stream = sys.stderr
            if stream is None:  # pythonw and friends
                return
            stream.write(text + "\n")
            stream.flush()
        except (OSError, ValueError) as exc:
            get_logger("stderr").debug("stderr mirror failed: %s", exc)

    def _start_watchdog(self, text: str) -> None:
        # Never cancelled: process exit makes it moot.
        timer = threading.Timer(FATAL_FLUSH_TIMEOUT, _flush_timeout, args=(text,))
        timer.daemon = True
        timer.start()

    # Leveled API

    def info(self, *args: Any) -> None:
        self._emit(None, Level.INFO, args)

    def infof(self, fmt: str, *args: Any) -> None:
        self._emit(None, Level.INFO, args, fmt)

    def warning(self, *args: Any) -> None:
        self._emit(None, Level.WARNING, args)

    def warningf(self, fmt: str, *args: Any) -> None:
        self._emit(None, Level.WARNING, args, fmt)

    def error(self, *args: Any) -> None:
        self._emit(None, Level.ERROR, args)

    def errorf(self, fmt: str, *args: Any) -> None:
        self._emit(None, Level.ERROR, args, fmt)

    def fatal(self, *args: Any) -> None:
        """Log at fatal level and raise ``FatalError``. Never returns."""
        self._emit(0, Level.FATAL, args)

    def fatalf(self, fmt: str, *args: Any) -> None:
        """Format, log at fatal level and raise ``FatalError``. Never returns."""
        self._emit(0, Level.FATAL, args, fmt)

    def vinfo(self, v: int, *args: Any) -> None:
        self._emit(v, Level.INFO, args)

    def vinfof(self, v: int, fmt: str, *args: Any) -> None:
        self._emit(v, Level.INFO, args, fmt)

    def vwarning(self, v: int, *args: Any) -> None:
        self._emit(v, Level.WARNING, args)

    def vwarningf(self, v: int, fmt: str, *args: Any) -> None:
        self._emit(v, Level.WARNING, args, fmt)

    def verror(self, v: int, *args: Any) -> None:
        self._emit(v, Level.ERROR, args)

    def verrorf(self, v: int, fmt: str, *args: Any) -> None:
        self._emit(v, Level.ERROR, args, fmt)


def new_logger(emit_to_stderr: bool, colorize: bool, include_timestamp: bool, *writers: Writer) -> Logger:
    """Build a logger mirroring to stderr (optionally colored) and writing to ``writers``."""
    return Logger(emit_to_stderr, colorize, include_timestamp, *writers)


__all__ = [
    "DIRECT_CALLER_SKIP",
    "FATAL_FLUSH_TIMEOUT",
    "FLUSH_TIMEOUT_EXIT_CODE",
    "UNKNOWN_FILE",
    "FatalError",
    "Logger",
    "new_logger",
    "sprint",
    "sprintf",
    "timestamp",
]
