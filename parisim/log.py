"""Logging setup for scenario drivers and scripts.

Library modules only create module-level loggers; handlers are attached
here by whoever runs a simulation.
"""
import logging
import sys
from typing import IO, Optional

from pythonjsonlogger.json import JsonFormatter

TEXT_FORMAT = "%(levelname)s::%(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def init_logger(
    level=logging.INFO,
    logger_name: str = "parisim",
    json: bool = False,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Initialize a logger for the simulator.

    Arguments:
        level: The logging level to log at.
        logger_name: Logger to configure, "parisim" (all library modules) by default.
        json: Emit one JSON object per record instead of text lines.
        stream: Output stream, stderr by default.

    Returns:
        The configured logger. Calling this again replaces the handler
        installed by the previous call.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_parisim_handler", False):
            logger.removeHandler(handler)

    if json:
        formatter = JsonFormatter(
            fmt=JSON_FORMAT,
            rename_fields={
                "levelname": "level",
                "message": "msg",
            },
        )
    else:
        formatter = logging.Formatter(fmt=TEXT_FORMAT)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler._parisim_handler = True
    logger.addHandler(handler)

    return logger
