"""Process-wide default logger and the module-level call surface.

Call :func:`init` once at startup; after that ``tallylog.info(...)`` and
friends forward to the logger it built. Using any forwarding function before
``init`` raises :class:`LoggerNotInitializedError`.
"""
from __future__ import annotations

import threading
from typing import IO, Any, List, Optional

from .config import LogOptions, default_log_name
from .logger import Logger, new_logger

_lock = threading.Lock()
_default: Optional[Logger] = None
_default_log_file: Optional[str] = None
# Handles opened by init() live as long as the process.
_log_files: List[IO[str]] = []


class LoggerNotInitializedError(RuntimeError):
    def __init__(self) -> None:
        super().__init__("tallylog.init() must be called before using the default logger")


def init(options: Optional[LogOptions] = None) -> Logger:
    """Create the default log file and install the default logger.

    The logger mirrors to stderr and writes to
    ``<log_dir>/<unix seconds>-<executable>-<pid>.log``. If that file cannot
    be created the logger still comes up, writing to stderr only, and says so
    with a warning line.
    """
    global _default, _default_log_file
    options = options or LogOptions()
    path: Optional[str] = default_log_name(options)
    writers: List[IO[str]] = []
    open_error: Optional[OSError] = None
    try:
        handle = open(path, "w", encoding="utf-8")
    except OSError as exc:
        open_error = exc
        path = None
    else:
        writers.append(handle)

    logger = new_logger(True, options.colorful, options.timestamp, *writers)
    logger.set_verbosity(options.verbosity)
    # Skip the forwarding functions below when resolving the caller.
    logger.caller_skip += 1

    with _lock:
        _log_files.extend(writers)
        _default = logger
        _default_log_file = path

    if open_error is not None:
        warningf("unable to open default log file: %s", open_error)
    return logger


def default_logger() -> Logger:
    logger = _default
    if logger is None:
        raise LoggerNotInitializedError()
    return logger


def default_log_file() -> Optional[str]:
    """Path of the file created by the last successful :func:`init`."""
    return _default_log_file


# Forwarding surface. Each function must call the logger method directly so
# the extra caller_skip frame lines up.

def info(*args: Any) -> None:
    default_logger().info(*args)


def infof(fmt: str, *args: Any) -> None:
    default_logger().infof(fmt, *args)


def warning(*args: Any) -> None:
    default_logger().warning(*args)


def warningf(fmt: str, *args: Any) -> None:
    default_logger().warningf(fmt, *args)


def error(*args: Any) -> None:
    default_logger().error(*args)


def errorf(fmt: str, *args: Any) -> None:
    default_logger().errorf(fmt, *args)


def fatal(*args: Any) -> None:
    default_logger().fatal(*args)


def fatalf(fmt: str, *args: Any) -> None:
    default_logger().fatalf(fmt, *args)


def vinfo(v: int, *args: Any) -> None:
    default_logger().vinfo(v, *args)


def vinfof(v: int, fmt: str, *args: Any) -> None:
    default_logger().vinfof(v, fmt, *args)


def vwarning(v: int, *args: Any) -> None:
    default_logger().vwarning(v, *args)


def vwarningf(v: int, fmt: str, *args: Any) -> None:
    default_logger().vwarningf(v, fmt, *args)


def verror(v: int, *args: Any) -> None:
    default_logger().verror(v, *args)


def verrorf(v: int, fmt: str, *args: Any) -> None:
    default_logger().verrorf(v, fmt, *args)


def set_verbosity(v: int) -> None:
    default_logger().set_verbosity(v)


def set_default_verbosity(v: int) -> None:
    default_logger().set_default_verbosity(v)


__all__ = [
    "LoggerNotInitializedError",
    "init",
    "default_logger",
    "default_log_file",
    "info",
    "infof",
    "warning",
    "warningf",
    "error",
    "errorf",
    "fatal",
    "fatalf",
    "vinfo",
    "vinfof",
    "vwarning",
    "vwarningf",
    "verror",
    "verrorf",
    "set_verbosity",
    "set_default_verbosity",
]
