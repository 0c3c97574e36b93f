"""
Logging configuration for the mbasic gateway.

Every module logs through a child of the ``avalon`` logger
(``get_logger(__name__)``), so a single handler on ``avalon`` shows which
layer (network, auth, parser) a record came from.
"""

import logging

import colorlog

LOGGER_NAME = "avalon"
LOG_FORMAT = "%(log_color)s%(asctime)s %(levelname)-7s%(reset)s %(blue)s%(name)s%(reset)s %(message)s"

log = logging.getLogger(LOGGER_NAME)


def get_logger(name: str) -> logging.Logger:
    """Logger for module *name*, always nested under ``avalon``."""
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def _setup_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    log.setLevel(level)
    log.handlers.clear()
    log.propagate = False

    handler = colorlog.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(
        LOG_FORMAT,
        datefmt="%H:%M:%S",
        log_colors={
            "DEBUG":    "cyan",
            "INFO":     "green",
            "WARNING":  "yellow",
            "ERROR":    "red",
            "CRITICAL": "bold_red",
        },
    ))
    log.addHandler(handler)
