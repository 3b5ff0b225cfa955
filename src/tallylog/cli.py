import argparse
import sys
from typing import List, Optional

from . import __version__
from .config import DEFAULT_LOG_DIR, LogOptions
from . import default
from .default import default_log_file, init
from .levels import LEVEL_NAMES, Level
from .logger import FatalError


def add_log_flags(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Register the flags understood by :func:`options_from_args` on ``parser``."""
    group = parser.add_argument_group("logging")
    group.add_argument("-v", "--verbosity", type=int, default=0, help="Drop messages logged above this verbosity (default: 0)")
    group.add_argument("--colorful", action="store_true", help="Color stderr lines by level (log files are never colored)")
    group.add_argument("--log-dir", default="", help=f"Directory for the auto-named log file (default: {DEFAULT_LOG_DIR})")
    group.add_argument("--timestamp", action="store_true", help="Prefix every line with a timestamp")
    return parser


def options_from_args(args: argparse.Namespace) -> LogOptions:
    return LogOptions(
        verbosity=int(getattr(args, "verbosity", 0) or 0),
        colorful=bool(getattr(args, "colorful", False)),
        log_dir=getattr(args, "log_dir", "") or "",
        timestamp=bool(getattr(args, "timestamp", False)),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tallylog",
        description="Write a message through the default tallylog logger (stderr + auto-named log file).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"tallylog {__version__}",
        help="Show version and exit",
    )
    parser.add_argument("--level", choices=sorted(LEVEL_NAMES), default="info", help="Message level (default: info)")
    parser.add_argument("--call-verbosity", type=int, default=None, help="Verbosity of the message itself (not allowed with fatal)")
    parser.add_argument("--print-log-file", action="store_true", help="Print the path of the created log file on stdout")
    parser.add_argument("message", nargs="*", help="Message words; read one message per stdin line when omitted")
    add_log_flags(parser)
    return parser


_PLAIN = {Level.INFO: default.info, Level.WARNING: default.warning, Level.ERROR: default.error, Level.FATAL: default.fatal}
_VERBOSE = {Level.INFO: default.vinfo, Level.WARNING: default.vwarning, Level.ERROR: default.verror}


def _emit(level: Level, call_verbosity: Optional[int], message: str) -> None:
    # Through the forwarding functions, so lines report this call site.
    if call_verbosity is None:
        _PLAIN[level](message)
    else:
        _VERBOSE[level](call_verbosity, message)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = LEVEL_NAMES[args.level]
    if level is Level.FATAL and args.call_verbosity is not None:
        parser.error("--call-verbosity cannot be combined with --level fatal")

    init(options_from_args(args))
    if args.print_log_file:
        print(default_log_file() or "", flush=True)

    messages = [" ".join(args.message)] if args.message else (line.rstrip("\n") for line in sys.stdin)
    try:
        for message in messages:
            _emit(level, args.call_verbosity, message)
    except FatalError:
        # The line is already on disk; end the process before the watchdog fires.
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
