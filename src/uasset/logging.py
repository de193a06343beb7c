"""The ``uasset`` logger.

Records go to the active reporter rather than to a stream handler, so log
output and progress share one backend: DEBUG maps to verbose messages and
WARNING/ERROR to the reporter's own levels.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from .reporting import get_reporter

LOGGER_NAME = "uasset"
_STEP_PREFIX = "  ->"

__all__ = ["LOGGER_NAME", "get_logger", "configure_logging", "step", "section"]


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


class _ReporterHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:  # noqa: BLE001
            self.handleError(record)
            return
        rep = get_reporter()
        if record.levelno >= logging.ERROR:
            rep.error(msg)
        elif record.levelno >= logging.WARNING:
            rep.warning(msg)
        elif record.levelno >= logging.INFO:
            rep.status(msg)
        else:
            rep.verbose(msg, level=1)


def configure_logging(verbosity: int = 0) -> logging.Logger:
    """Attach the reporter handler; DEBUG records are kept from ``-v`` on."""
    logger = get_logger()
    logger.setLevel(logging.DEBUG if verbosity >= 1 else logging.INFO)
    for handler in list(logger.handlers):
        if isinstance(handler, _ReporterHandler):
            logger.removeHandler(handler)
    handler = _ReporterHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def step(message: str) -> None:
    get_reporter().status(f"{_STEP_PREFIX} {message}")


@contextmanager
def section(title: str) -> Iterator[logging.Logger]:
    """Open a titled block of reporter output and yield the logger."""
    logger = get_logger()
    get_reporter().section(title)
    try:
        yield logger
    finally:
        logger.debug("end section: %s", title)
