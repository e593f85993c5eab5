"""Loguru sink setup shared by the API process and the operator scripts."""
from __future__ import annotations

import sys

from loguru import logger

from .config import Settings, get_settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(settings: Settings | None = None) -> None:
    """Replace loguru's default sink with one honouring LOG_LEVEL."""
    settings = settings or get_settings()
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format=LOG_FORMAT,
        backtrace=settings.app_env != "prod",
        diagnose=settings.app_env != "prod",
    )
    logger.debug("Logging configured (level={}, env={})", settings.log_level, settings.app_env)
