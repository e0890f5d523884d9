"""
Logging setup.

One stdout handler on the package logger; gunicorn and the container
runtime pick it up from there. Modules log through
``logging.getLogger(__name__)``.
"""
import logging
import sys

PACKAGE_LOGGER = "recovery_insights"

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stdout handler to the package logger. Safe to call twice."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    # Avoid duplicate handlers on reload
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    logger.addHandler(handler)
    return logger
