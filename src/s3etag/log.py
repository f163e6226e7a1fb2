"""Logging configuration for s3etag."""

import logging
import sys

LOGGER_NAME = "s3etag"

CONSOLE_FORMAT = "%(name)s: %(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-5s [%(threadName)s] %(message)s"

_logger: logging.Logger | None = None


def _level_for(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.WARNING
    if verbose:
        return logging.DEBUG
    return logging.INFO


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: str | None = None,
) -> None:
    """Configure logging for the CLI.

    Console messages go to stderr so stdout carries only ETag lines.
    """
    global _logger

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    level = _level_for(verbose, quiet)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        file_handler.setFormatter(
            logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
        logger.addHandler(file_handler)
        level = logging.DEBUG

    logger.setLevel(level)
    _logger = logger


def get_logger() -> logging.Logger:
    """Get the logger, initializing with defaults if setup_logging wasn't called."""
    if _logger is None:
        setup_logging()
    assert _logger is not None
    return _logger
