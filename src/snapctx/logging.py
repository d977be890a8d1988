from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from pathlib import Path

LOGGER_NAME = "snapctx"

_LOGGING_CONFIGURED = False


def _has_file_handler(root: logging.Logger, filename: str) -> bool:
    target = os.path.abspath(filename)
    return any(isinstance(h, logging.FileHandler) and h.baseFilename == target for h in root.handlers)


def attach_log_file(filename: str | Path) -> None:
    """Send snapctx log lines to `filename` as well; a file is attached once."""
    root = logging.getLogger()
    if not _has_file_handler(root, str(filename)):
        root.addHandler(logging.FileHandler(str(filename), encoding="utf-8"))


def _configure_structlog() -> None:
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def setup_logging(filename: str | Path | None = None) -> structlog.BoundLogger:
    """Set up JSON-line logging for snapctx.

    The module-level `logger` is built at import time, before the CLI has read
    `--log-file`, so the first call always wins the stdlib/structlog setup and a
    later call with a `filename` only attaches a file handler.

    Args:
        filename: Optional path to a log file. If None, logs go to stderr.

    Returns:
        The structlog logger named `snapctx`.
    """
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if not _LOGGING_CONFIGURED:
        handler: logging.Handler = (
            logging.FileHandler(str(filename), encoding="utf-8") if filename else logging.StreamHandler(sys.stderr)
        )
        logging.basicConfig(level=logging.INFO, handlers=[handler], format="%(message)s")
        _configure_structlog()
        _LOGGING_CONFIGURED = True
    elif filename:
        attach_log_file(filename)

    return structlog.get_logger(LOGGER_NAME)


logger = setup_logging()
