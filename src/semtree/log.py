"""Logging setup for the semtree command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "semtree"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the semtree hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Route semtree diagnostics to stderr; debug tracing is enabled with ``verbose``."""
    level = logging.DEBUG if verbose else logging.WARNING
    logger = get_logger()
    logger.setLevel(level)

    # Repeated calls replace the handler.
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
