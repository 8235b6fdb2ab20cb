from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from simpleweb.core.errors import ConfigurationError

from .core import DispatchSettings, LoggingSettings


__all__ = ["Settings", "ConfigurationError", "get_settings"]


class Settings(BaseSettings):
    """
    Configuration settings for SimpleWeb applications.

    Settings are loaded from environment variables (prefix ``SIMPLEWEB_``,
    nested with ``__``, e.g. ``SIMPLEWEB_LOGGING__LEVEL=DEBUG``) and a ``.env``
    file. Environment variables take precedence over .env file values.
    """

    model_config = SettingsConfigDict(
        env_prefix="SIMPLEWEB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    dispatch: DispatchSettings = Field(
        default_factory=DispatchSettings,
        description="Handler dispatch configuration",
    )


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance.

    Raises:
        ConfigurationError: If the environment holds invalid values
    """
    try:
        return Settings()
    except ValueError as e:
        raise ConfigurationError(f"Configuration error: {e}") from e
