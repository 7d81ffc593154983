"""structlog setup for the UI and the CLI."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

import structlog

_open_log: TextIO | None = None


def configure_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """Configure structlog.

    Textual owns the terminal while the UI runs, so the UI passes *log_file*
    and all events go there.  Without *log_file* events go to stderr.
    """
    global _open_log

    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO

    if log_file is not None:
        log_file.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        if _open_log is not None:
            _open_log.close()
        _open_log = log_file.open("a", encoding="utf-8")
        logger_factory = structlog.WriteLoggerFactory(file=_open_log)
        renderer = structlog.processors.JSONRenderer()
    else:
        logger_factory = structlog.WriteLoggerFactory(file=sys.stderr)
        renderer = structlog.dev.ConsoleRenderer(colors=False)  # type: ignore[assignment]

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=logger_factory,
        cache_logger_on_first_use=False,
    )
