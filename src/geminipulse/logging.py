"""Centralized logging configuration using loguru and structlog."""

import logging
import sys

import structlog
from loguru import logger

from geminipulse.config import settings

LOG_LEVEL = settings.log_level.upper()

# stdout belongs to the dashboard, so every log sink writes to stderr
logger.remove()
logger.add(sys.stderr, level=LOG_LEVEL, colorize=True)

structlog.configure(
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelNamesMapping()[LOG_LEVEL]
    ),
    logger_factory=structlog.PrintLoggerFactory(sys.stderr),
)

struct_logger = structlog.get_logger()

__all__ = ["logger", "struct_logger"]
