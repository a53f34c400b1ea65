"""Loguru setup for the CLI and the DAO.

The DAO logs straight through loguru. SQLAlchemy logs through stdlib
``logging``; those records are forwarded into loguru so everything ends up
on one stderr sink.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

_TEXT_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

_SQLALCHEMY_LOGGERS = ("sqlalchemy", "sqlalchemy.engine", "sqlalchemy.pool")


class InterceptHandler(logging.Handler):
    """Forward stdlib records to loguru, keeping the caller's location."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip the frames that belong to the logging module itself
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _route_sqlalchemy(handler: logging.Handler, *, verbose: bool) -> None:
    # SQL echo is only interesting when debugging
    sqlalchemy_level = logging.INFO if verbose else logging.WARNING
    for name in _SQLALCHEMY_LOGGERS:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = [handler]
        stdlib_logger.propagate = False
        stdlib_logger.setLevel(sqlalchemy_level)


def setup_logging(*, level: str = "INFO", json: bool = False) -> None:
    """Replace loguru's default sink and forward stdlib logging into it.

    ``json=True`` writes one serialized record per line instead of coloured text.
    Safe to call more than once; each call replaces the previous sinks.
    """
    logger.remove()
    if json:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=_TEXT_FORMAT, colorize=True)

    handler = InterceptHandler()
    _route_sqlalchemy(handler, verbose=level in ("TRACE", "DEBUG"))
    logging.root.handlers = [handler]
    logging.root.setLevel(logging.DEBUG)
