"""Lambda plugin settings using Pydantic Settings."""

from functools import lru_cache
from typing import Any

from loguru import logger
from pydantic import SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from lambda_attach.domain.errors import ConfigurationError


class LambdaSettings(BaseSettings):
    """Plugin options, loaded from keyword options or ``LAMBDA_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LAMBDA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="forbid",
        case_sensitive=False,
    )

    # Required: where Lambda sends its results
    callback_url: str

    # AWS client
    access_key_id: str | None = None
    secret_access_key: SecretStr | None = None
    session_token: SecretStr | None = None
    region: str | None = None
    profile: str | None = None
    endpoint: str | None = None
    retry_limit: int | None = None
    validate_params: bool = True

    # Logging
    log_level: str = "INFO"
    log_format: str | None = None

    @classmethod
    def from_options(cls, **options: Any) -> "LambdaSettings":
        """Build settings from plugin options, rejecting unknown names."""
        for key in options:
            if key not in cls.model_fields:
                logger.warning(f"The :{key} option is not supported by the Lambda plugin")
                raise ConfigurationError(
                    f"The :{key} option is not supported by the Lambda plugin",
                    {"option": key},
                )
        return _validated(cls, options)


def _validated(cls: type[LambdaSettings], options: dict[str, Any]) -> LambdaSettings:
    try:
        return cls(**options)
    except ValidationError as e:
        for error in e.errors():
            option = ".".join(str(part) for part in error["loc"])
            if error["type"] == "missing":
                raise ConfigurationError(
                    f"The :{option} option is required for Lambda plugin", {"option": option}
                ) from e
        raise ConfigurationError(f"Invalid Lambda plugin settings: {e}") from e


@lru_cache
def get_settings() -> LambdaSettings:
    """Get cached settings instance."""
    return _validated(LambdaSettings, {})
