"""Application logging helpers."""

import logging as py_logging
import sys
from contextlib import contextmanager
from logging.handlers import MemoryHandler
from typing import Iterator, Optional, TextIO

LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "WARNING": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
LOGGER_NAME = "branchpick"
_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def configure_logging(level: str = "WARNING", stream: Optional[TextIO] = None) -> py_logging.Logger:
    """Send ``branchpick`` log records at ``level`` and above to ``stream`` (stderr by default)."""
    resolved = LOG_LEVELS.get(level.upper(), py_logging.WARNING)

    logger = py_logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)
    logger.handlers.clear()

    handler = py_logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(py_logging.Formatter(_FORMAT))
    logger.addHandler(handler)

    logger.propagate = False
    return logger


@contextmanager
def hold_output(name: str = LOGGER_NAME) -> Iterator[None]:
    """Buffer log records while the terminal is taken over, then write them out.

    Records are replayed to the logger's own handlers on exit, in order.
    """
    logger = py_logging.getLogger(name)
    handlers = list(logger.handlers)
    if not handlers:
        yield
        return

    buffer = MemoryHandler(capacity=1024, flushLevel=py_logging.CRITICAL + 1)
    logger.handlers = [buffer]
    try:
        yield
    finally:
        logger.handlers = handlers
        for record in buffer.buffer:
            for handler in handlers:
                if record.levelno >= handler.level:
                    handler.handle(record)
        buffer.close()
