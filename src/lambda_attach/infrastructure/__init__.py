# src/lambda_attach/infrastructure/__init__.py
"""Infrastructure layer - AWS, storage, persistence, HTTP and configuration."""

from lambda_attach.infrastructure.logging import configure_logging
from lambda_attach.infrastructure.settings import LambdaSettings, get_settings

__all__ = [
    "LambdaSettings",
    "get_settings",
    "configure_logging",
]
