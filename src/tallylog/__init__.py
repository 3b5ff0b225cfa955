"""tallylog: leveled, counted, synchronous logging.

Expose a single source of truth for the version. Prefer reading from
importlib.metadata so that an editable install or wheel always reports
the version declared in pyproject.toml; fall back to a hardcoded string
for direct source usage without installation.
"""

from __future__ import annotations

from importlib import metadata as _metadata

from .config import DEFAULT_LOG_DIR, LogOptions
from .default import (
	LoggerNotInitializedError,
	default_log_file,
	default_logger,
	error,
	errorf,
	fatal,
	fatalf,
	info,
	infof,
	init,
	set_default_verbosity,
	set_verbosity,
	verror,
	verrorf,
	vinfo,
	vinfof,
	vwarning,
	vwarningf,
	warning,
	warningf,
)
from .levels import Level
from .logger import FatalError, Logger, new_logger
from .sinks import FanOutWriter

_FALLBACK_VERSION = "0.1.0"  # MUST match pyproject.toml [project].version

try:  # pragma: no cover - success path covered indirectly via CLI test
	__version__ = _metadata.version("tallylog")  # type: ignore[assignment]
except _metadata.PackageNotFoundError:  # pragma: no cover - running from a source checkout
	__version__ = _FALLBACK_VERSION

__all__ = [
	"__version__",
	"DEFAULT_LOG_DIR",
	"FanOutWriter",
	"FatalError",
	"Level",
	"LogOptions",
	"Logger",
	"LoggerNotInitializedError",
	"default_log_file",
	"default_logger",
	"error",
	"errorf",
	"fatal",
	"fatalf",
	"info",
	"infof",
	"init",
	"new_logger",
	"set_default_verbosity",
	"set_verbosity",
	"verror",
	"verrorf",
	"vinfo",
	"vinfof",
	"vwarning",
	"vwarningf",
	"warning",
	"warningf",
]
