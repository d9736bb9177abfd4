"""
Logging Configuration
Attaches handlers to the 'fecore' logger.

Library modules only create child loggers (``logging.getLogger(__name__)``);
nothing is printed until an application or test harness calls
:func:`setup_logging`.
"""
import logging
import os
import sys
from typing import Optional, TextIO, Union

import fecore.config as config

PACKAGE_LOGGER = "fecore"
LOG_LEVEL_ENV = "FECORE_LOG_LEVEL"


def resolve_level(level: Union[int, str, None]) -> int:
    """
    Turn a level name or number into a logging level.

    Args:
        level: e.g. ``logging.DEBUG``, ``"debug"``, or None to read ``FECORE_LOG_LEVEL``
            (INFO when unset).

    Raises:
        ValueError: If the level name is unknown.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown logging level '{level}'.")
    return value


def setup_logging(
    level: Union[int, str, None] = None,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Configures the 'fecore' logger.

    Args:
        level: Logging level (e.g. logging.DEBUG, "INFO"). Defaults to ``FECORE_LOG_LEVEL``.
        log_file: Optional path to save logs to a file.
        stream: Console stream, stdout by default.

    Returns:
        The configured package logger.
    """
    level = resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Calling twice must not duplicate records
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info(
        "Logging initialized at %s (contracts %s).",
        logging.getLevelName(level),
        "enabled" if config.CONTRACTS_ENABLED else "disabled"
    )
    return logger
