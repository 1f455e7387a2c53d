from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import TextIO

"""Labeled stdout logging for the ``medflow`` package.

Each line starts with a label (DEBUG, INFO, WARN, ERROR, CRITICAL or SUMMARY)
followed by the message. SUMMARY is a custom level between INFO and WARNING
reserved for the end-of-run line. Module loggers under ``medflow.`` propagate
into the one configured handler.
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LEVEL_LABELS",
    "LabeledFormatter",
    "setup_logging",
    "set_level",
    "get_logger",
    "log_summary",
    "reset_logging",
]

LOGGER_NAME = "medflow"

SUMMARY_LEVEL = 25

LEVEL_LABELS: Mapping[int, str] = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    SUMMARY_LEVEL: "SUMMARY",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "CRITICAL",
}

# set on the handler setup_logging installs, so reset can find it again
_OWNED = "_medflow_handler"


class LabeledFormatter(logging.Formatter):
    """``LABEL message``, with any traceback on the following lines."""

    def __init__(self, labels: Mapping[int, str] | None = None) -> None:
        super().__init__()
        self.labels = dict(LEVEL_LABELS if labels is None else labels)

    def format(self, record: logging.LogRecord) -> str:
        label = self.labels.get(record.levelno, record.levelname)
        line = f"{label} {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _owned_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, _OWNED, False)]


def setup_logging(level: int = logging.INFO, stream: TextIO | None = None) -> logging.Logger:
    """Attach the labeled handler to the ``medflow`` logger.

    A second call returns the logger untouched; use ``set_level`` to change
    verbosity afterwards. ``stream`` defaults to the current ``sys.stdout``.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if _owned_handlers(logger):
        return logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(LabeledFormatter())
    setattr(handler, _OWNED, True)

    # foreign handlers would print every line twice
    for h in logger.handlers[:]:
        logger.removeHandler(h)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def set_level(level: int) -> logging.Logger:
    """Change the threshold of the application logger and its handler."""
    logger = get_logger()
    logger.setLevel(level)
    for h in _owned_handlers(logger):
        h.setLevel(level)
    return logger


def get_logger() -> logging.Logger:
    return setup_logging()


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Detach the handler so the next ``setup_logging`` starts fresh (tests)."""
    logger = logging.getLogger(LOGGER_NAME)
    for h in _owned_handlers(logger):
        logger.removeHandler(h)
        h.close()
