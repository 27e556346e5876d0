"""
Logging configuration for command tracing.
"""
import logging
import sys

PACKAGE_LOGGER = "ansible_lab"


def configure_logging(verbose: bool = False):
    """
    Attaches a stderr handler to the package logger when verbose output is requested.
    Without it the package logger stays silent.
    """
    app_logger = logging.getLogger(PACKAGE_LOGGER)
    app_logger.propagate = False

    if not verbose:
        app_logger.setLevel(logging.WARNING)
        return

    if not app_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("[DEBUG] %(name)s: %(message)s"))
        app_logger.addHandler(handler)
    app_logger.setLevel(logging.DEBUG)


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the package logger."""
    if name.startswith(PACKAGE_LOGGER):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
