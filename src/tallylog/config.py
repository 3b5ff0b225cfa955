import os
import sys
import time
from dataclasses import dataclass
from typing import Optional

DEFAULT_LOG_DIR = "/var/log"


@dataclass
class LogOptions:
    # Calls logged at a verbosity above this are dropped
    verbosity: int = 0
    # ANSI colors on stderr (persisted logs are never colored)
    colorful: bool = False
    # Base directory for the auto-named log file; empty means DEFAULT_LOG_DIR
    log_dir: str = ""
    # Prefix every line with a full timestamp
    timestamp: bool = False


def resolve_log_dir(options: LogOptions) -> str:
    return options.log_dir or DEFAULT_LOG_DIR


def executable_name(argv0: Optional[str] = None) -> str:
    if argv0 is None:
        argv0 = sys.argv[0] if sys.argv else ""
    name = os.path.basename(argv0)
    if not name:
        # Embedded interpreters may leave argv[0] empty.
        name = os.path.basename(sys.executable) or "python"
    return name


def default_log_name(
    options: LogOptions,
    now: Optional[float] = None,
    argv0: Optional[str] = None,
    pid: Optional[int] = None,
) -> str:
    """Path of the default log file: ``<dir>/<unix seconds>-<executable>-<pid>.log``."""
    seconds = int(time.time() if now is None else now)
    pid = os.getpid() if pid is None else pid
    return f"{resolve_log_dir(options)}/{seconds}-{executable_name(argv0)}-{pid}.log"


__all__ = ["DEFAULT_LOG_DIR", "LogOptions", "resolve_log_dir", "executable_name", "default_log_name"]
