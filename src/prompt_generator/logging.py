from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from pathlib import Path

LOGGER_NAME = "prompt_generator"

_LOGGING_CONFIGURED = False
_FILE_HANDLERS: dict[str, logging.FileHandler] = {}


def setup_logging(filename: str | Path | None = None) -> structlog.BoundLogger:
    """Set up structured logging for the prompt_generator module.

    Records are rendered as JSON lines on stderr. Calling this again with a
    filename attaches an extra file handler, once per distinct file.

    Args:
        filename: Optional path to a log file, written in addition to stderr.

    Returns:
        A structlog logger instance configured for the prompt_generator module.
    """
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if not _LOGGING_CONFIGURED:
        logging.basicConfig(
            level=logging.INFO,
            handlers=[logging.StreamHandler(sys.stderr)],
            format="%(message)s",
        )
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(ensure_ascii=False),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _LOGGING_CONFIGURED = True

    if filename and str(filename) not in _FILE_HANDLERS:
        handler = logging.FileHandler(str(filename), encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(message)s"))
        logging.getLogger(LOGGER_NAME).addHandler(handler)
        _FILE_HANDLERS[str(filename)] = handler

    return structlog.get_logger(LOGGER_NAME)


logger = setup_logging()
