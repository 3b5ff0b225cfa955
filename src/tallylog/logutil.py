"""Diagnostics for tallylog itself.

The library reports its own trouble (a destination that refuses writes, a
format template that does not match its arguments) on a plain stdlib logger
tree rooted at ``tallylog`` so that those reports never recurse into a
``tallylog.Logger``. Quiet by default: WARNING and above only. Applications
that configure ``logging`` themselves keep full control; we only attach a
handler when nobody else has.
"""
from __future__ import annotations

import logging
from typing import Optional

ROOT_NAME = "tallylog"

_configured = False


def _configure_root() -> logging.Logger:
    global _configured
    root = logging.getLogger(ROOT_NAME)
    if not _configured:
        if not root.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("[%(name)s] %(levelname)s: %(message)s"))
            root.addHandler(handler)
            root.setLevel(logging.WARNING)
        _configured = True
    return root


def get_logger(component: Optional[str] = None) -> logging.Logger:
    """Return the diagnostic logger, or the child named ``component``."""
    root = _configure_root()
    return root.getChild(component) if component else root

__all__ = ["get_logger", "ROOT_NAME"]
