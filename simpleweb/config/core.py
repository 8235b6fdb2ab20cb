"""Core configuration settings - logging and dispatch."""

from pydantic import BaseModel, Field, field_validator


# === Logging Configuration ===


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    format: str = Field(
        default="auto",
        description="Logging output format: 'rich' for development, 'json' for production, 'auto' picks rich",
    )

    file: str | None = Field(
        default=None,
        description="Path to JSON log file. If specified, logs are also written to this file",
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        upper_v = v.upper()
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v

    @field_validator("format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate and normalize log format."""
        lower_v = v.lower()
        valid_formats = ["auto", "rich", "json"]
        if lower_v not in valid_formats:
            raise ValueError(f"Invalid log format: {v}. Must be one of {valid_formats}")
        return lower_v

    @property
    def json_logs(self) -> bool:
        return self.format == "json"


# === Dispatch Configuration ===


class DispatchSettings(BaseModel):
    """Handler dispatch configuration."""

    run_sync_in_threadpool: bool = Field(
        default=True,
        description="Run synchronous handlers in a worker thread instead of on the event loop",
    )

    materialize_output: bool = Field(
        default=True,
        description="Force lazily evaluated handler output into a list before writing the response",
    )

    strict_json: bool = Field(
        default=False,
        description="Use pydantic strict mode when deserializing request bodies",
    )
