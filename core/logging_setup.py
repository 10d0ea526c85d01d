"""
Bookshelf logging setup.

Single loguru sink on stdout. Every record carries ``extra[request_id]``;
the request middleware fills it through ``logger.contextualize`` and
anything logged outside a request shows ``-``.
"""
from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[<cyan>{extra[request_id]}</cyan>] | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def configure_logging(level: str = "INFO", *, colorize: bool | None = None) -> None:
    """Reset loguru and install the stdout sink at ``level``."""
    logger.remove()
    logger.configure(extra={"request_id": "-"})
    logger.add(
        sink=sys.stdout,
        level=level.upper(),
        format=LOG_FORMAT,
        colorize=colorize,
        backtrace=False,
        diagnose=False,
    )
