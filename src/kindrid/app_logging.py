"""Logging setup shared by the server and the start script."""

import logging

_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the `kindrid` logger.

    Repeated calls only adjust the level, so the app factory and the start
    script can both call it.
    """
    logger = logging.getLogger("kindrid")
    logger.setLevel(level.upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
