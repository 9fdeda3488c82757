"""Loguru setup shared by the operator scripts and the UI shell.

Library modules only bind a named logger; sinks are configured once per
process here. Standard-library logging (httpx, SQLAlchemy) is routed through
Loguru so that all output shares one format.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

__all__ = ["configure_logging"]

log = logger.bind(module="logs")


class _LoguruInterceptHandler(logging.Handler):
    """Bridge standard-library logging records into Loguru."""

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - thin wrapper
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(exception=record.exc_info).log(level, record.getMessage())


def _configure_stdlib_logging(level: str) -> None:
    handler: logging.Handler = _LoguruInterceptHandler()

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    # httpx logs every request at INFO; keep it quiet unless debugging.
    httpx_level = level if level == "DEBUG" else "WARNING"
    for name in ("httpx", "httpcore"):
        lib_logger = logging.getLogger(name)
        lib_logger.handlers = [handler]
        lib_logger.propagate = False
        lib_logger.setLevel(httpx_level)

    logging.captureWarnings(True)


def configure_logging(level: str | None = None) -> str:
    """Install a single stderr sink at ``level`` and bridge stdlib logging.

    Returns the normalised level name actually applied.
    """

    resolved = (level or "INFO").strip().upper() or "INFO"

    logger.remove()
    logger.add(
        sys.stderr,
        level=resolved,
        backtrace=False,
        diagnose=False,
    )

    _configure_stdlib_logging(resolved)

    log.info("Logging initialised at level {}", resolved)
    return resolved
