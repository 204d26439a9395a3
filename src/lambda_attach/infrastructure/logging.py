from __future__ import annotations

import sys

from loguru import logger

from lambda_attach.infrastructure.settings import LambdaSettings

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(settings: LambdaSettings) -> int:
    """Replace loguru's default handler with one honouring the plugin settings."""
    logger.remove()
    return logger.add(
        sys.stderr,
        format=settings.log_format or DEFAULT_FORMAT,
        level=settings.log_level.upper(),
    )
