"""Centralized logging configuration for kspath.

Every module obtains its logger through `get_logger(__name__)`, which makes it a
child of the single "kspath" logger configured here. Child loggers carry no
handlers and no level of their own, so one call to `set_global_log_level`
switches the whole package.
"""

import logging
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "kspath"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_ROOT_LOGGER_CONFIGURED = False


def _package_logger() -> logging.Logger:
    return logging.getLogger(ROOT_LOGGER_NAME)


def _build_handler(
    handler: Optional[logging.Handler], format_string: Optional[str]
) -> logging.Handler:
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    return handler


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach a single handler to the "kspath" logger.

    Repeated calls do nothing until `reset_logging` is called. Records also
    propagate to the Python root logger, where pytest's ``caplog`` listens.

    Args:
        level: Initial logging level (default: INFO).
        format_string: Record format (default: `DEFAULT_FORMAT`).
        handler: Handler to install (default: StreamHandler on stdout).
    """
    global _ROOT_LOGGER_CONFIGURED
    if _ROOT_LOGGER_CONFIGURED:
        return

    package_logger = _package_logger()
    package_logger.handlers.clear()
    package_logger.addHandler(_build_handler(handler, format_string))
    package_logger.setLevel(level)
    package_logger.propagate = True
    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger `name`, configuring the "kspath" logger on first use."""
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        value = logging.getLevelName(level.upper())
        if not isinstance(value, int):
            raise ValueError(f"Unknown log level: {level!r}")
        return value
    return level


def set_global_log_level(level: Union[int, str]) -> None:
    """Set the level of the "kspath" logger and its handlers.

    Args:
        level: A logging level such as ``logging.DEBUG`` or its name
            (``"debug"``, ``"WARNING"``...).

    Raises:
        ValueError: If `level` is a name logging does not know.
    """
    setup_root_logger()
    numeric = _coerce_level(level)

    package_logger = _package_logger()
    package_logger.setLevel(numeric)
    for handler in package_logger.handlers:
        handler.setLevel(numeric)


def level_for_flags(
    verbose: bool = False, quiet: bool = False, json_output: bool = False
) -> int:
    """Map the CLI verbosity flags onto a logging level.

    ``verbose`` wins over everything else. ``quiet`` and ``json_output`` both
    lower the output to warnings, since log records share stdout with the
    command's results. With no flag the level is INFO.
    """
    if verbose:
        return logging.DEBUG
    if quiet or json_output:
        return logging.WARNING
    return logging.INFO


def enable_debug_logging() -> None:
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Return to INFO level."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Drop the installed handler so `setup_root_logger` runs again (for tests)."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    package_logger = _package_logger()
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


setup_root_logger()
