"""Loguru handlers for the driver.

The host runtime loads the driver as a library, so its records are muted
until the ``[logging]`` table of the driver configuration asks for them.
``DigitalOceanDriver`` calls ``enable_logging`` itself when that table is
present.
"""

from __future__ import annotations

import sys

from loguru import logger

from kontainer_digitalocean.config import LogConfig

PACKAGE = "kontainer_digitalocean"

logger.disable(PACKAGE)

LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | digitalocean | "
    "{name}:{function}:{line} - {message}"
)


def enable_logging(config: LogConfig) -> list[int]:
    """Unmute driver records and route them per ``config``.

    Returns:
        Handler ids, to be passed to ``disable_logging``.
    """
    logger.enable(PACKAGE)
    handler_ids: list[int] = []

    if config.console:
        handler_ids.append(
            logger.add(sys.stderr, level=config.level, format=LOG_FORMAT, filter=PACKAGE)
        )

    if config.file:
        # diagnose=False: variable values in tracebacks would include the token
        handler_ids.append(
            logger.add(
                config.file,
                level="DEBUG",
                format=LOG_FORMAT,
                filter=PACKAGE,
                diagnose=False,
            )
        )

    return handler_ids


def disable_logging(handler_ids: list[int]) -> None:
    for hid in handler_ids:
        logger.remove(hid)
    logger.disable(PACKAGE)


__all__ = ["LOG_FORMAT", "disable_logging", "enable_logging"]
