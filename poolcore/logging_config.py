"""Centralized logging configuration for the pool scoring core."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

# Loggers used by the provider adapters (see BaseFetcher.provider)
PROVIDER_LOGGERS = ('poolcore.espn', 'poolcore.sportradar')


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
    provider_level: Optional[int] = None,
) -> logging.Logger:
    """
    Configure the ``poolcore`` logger.

    Creates a timestamped file handler with a detailed format and a console
    handler with a short one. Calling it again replaces earlier handlers.

    Provider adapters log every outbound request at DEBUG. ``provider_level``
    sets their loggers independently of scoring output, so request tracing
    can be turned on without debug noise from scoring (or silenced while
    scoring runs at DEBUG). urllib3 is held at WARNING either way.

    Args:
        log_dir: Directory for log files (default: ./logs)
        level: Logging level (default: INFO)
        log_to_file: Whether to log to file (default: True)
        log_to_console: Whether to log to console (default: True)
        provider_level: Level for adapter loggers (default: inherit ``level``)

    Returns:
        Configured logger instance

    Example:
        from poolcore.logging_config import setup_logging
        logger = setup_logging(log_to_file=False, provider_level=logging.DEBUG)
        logger.info("Syncing leaderboard")
    """
    logger = logging.getLogger('poolcore')
    logger.setLevel(level)
    logger.handlers = []

    for name in PROVIDER_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if provider_level is None else provider_level)
    logging.getLogger('urllib3').setLevel(logging.WARNING)

    handler_level = level if provider_level is None else min(level, provider_level)

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    simple_formatter = logging.Formatter('%(levelname)s: %(message)s')

    if log_to_file:
        if log_dir is None:
            log_dir = Path('logs')
        log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / f'poolcore_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(handler_level)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(handler_level)
        console_handler.setFormatter(simple_formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str = 'poolcore') -> logging.Logger:
    """
    Get a logger instance.

    Names under ``poolcore.`` propagate to the handlers installed by
    setup_logging(). If setup_logging() hasn't been called, the logger has
    no handlers of its own and Python's last-resort handler applies
    (WARNING and above to stderr).

    Args:
        name: Logger name (default: 'poolcore')

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
