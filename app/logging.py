# app/logging.py
import logging
import sys
from typing import Union

import colorlog

_FORMAT = "%(log_color)s%(asctime)s %(levelname)-8s%(reset)s %(cyan)s%(name)s%(reset)s %(message)s"


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Send every log record to stdout through one colorlog handler.

    ``level`` may be a name such as ``"debug"`` (as read from LOG_LEVEL); unknown
    names fall back to INFO. The per-request uvicorn access log is only kept
    at DEBUG, store mutations already log one line each.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = colorlog.StreamHandler(sys.stdout)
    handler.setFormatter(
        colorlog.ColoredFormatter(
            _FORMAT,
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "white",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    logging.getLogger("uvicorn.error").setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO if level <= logging.DEBUG else logging.WARNING)
