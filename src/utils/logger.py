"""Logging setup for the storefront checkout."""

import logging
import sys
from pathlib import Path
from typing import Optional

from src.utils.config import log_level

APP_LOGGER = "storefront_checkout"

# Third-party loggers that log every storefront request at INFO/DEBUG.
_CHATTY_LOGGERS = ("urllib3",)


def setup_logger(
    name: str = APP_LOGGER,
    level: Optional[int] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure and return the checkout logger.

    Args:
        name: Logger name.
        level: Logging level. None reads CHECKOUT_LOG_LEVEL (default INFO).
        log_file: Optional path to log file. If None, logs to stderr only.

    Returns:
        Configured logger. Calling again (e.g. on a Streamlit rerun) returns
        it unchanged.
    """
    log = logging.getLogger(name)
    if log.handlers:
        return log

    if level is None:
        level = log_level()
    log.setLevel(level)
    log.propagate = False
    for chatty in _CHATTY_LOGGERS:
        logging.getLogger(chatty).setLevel(max(level, logging.WARNING))

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for h in handlers:
        h.setFormatter(fmt)
        log.addHandler(h)
    return log


def get_logger(name: str = APP_LOGGER) -> logging.Logger:
    """Return the application logger. Use after setup_logger has been called."""
    return logging.getLogger(name)
