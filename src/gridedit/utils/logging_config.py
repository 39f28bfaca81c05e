"""Logging setup shared by the engine, the CLI and the server."""

from __future__ import annotations

import logging
import sys

from gridedit.config import GRIDEDIT_LOG_LEVEL

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_INTERCEPTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi")

# Attributes present on every LogRecord; anything else arrived through ``extra=``.
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}

_configured = False


class ExtraFormatter(logging.Formatter):
    """Formatter that appends ``extra=`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if not extras:
            return line
        pairs = " ".join(f"{key}={value!r}" for key, value in sorted(extras.items()))
        return f"{line} | {pairs}"


def configure_logging(level: str | int | None = None) -> None:
    """Install a single stderr handler on the root logger.

    Uvicorn and FastAPI loggers lose their own handlers and propagate to the
    root, so server output shares one format with the engine.
    """
    global _configured

    root = logging.getLogger()
    root.setLevel(level or GRIDEDIT_LOG_LEVEL)
    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ExtraFormatter(_LOG_FORMAT))
    root.addHandler(handler)

    for name in _INTERCEPTED_LOGGERS:
        intercepted = logging.getLogger(name)
        intercepted.handlers.clear()
        intercepted.propagate = True

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a module logger, configuring the root handler on first use."""
    configure_logging()
    return logging.getLogger(name)
