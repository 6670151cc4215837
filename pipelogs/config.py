"""Runtime configuration — env-driven settings for log aggregation.

Centralized config using pydantic-settings for environment variable
support.  Reads from a .env file and PIPELOGS_* environment variables.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class LogsSettings(BaseSettings):
    """Log aggregation settings with environment variable overrides.

    All settings can be overridden via PIPELOGS_* environment variables
    or a .env file in the working directory.

    Examples
    --------
    Override via environment::

        export PIPELOGS_NAMESPACE=cd
        export PIPELOGS_LOG_LEVEL=DEBUG
        export PIPELOGS_STREAM_TIMEOUT_SECONDS=900

    Or via .env file::

        PIPELOGS_POLL_INTERVAL_SECONDS=2
        PIPELOGS_COLOR=false
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PIPELOGS_",
        env_file_encoding="utf-8",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"
    namespace: str = "jx"

    # Live streaming
    poll_interval_seconds: float = 1.0
    stream_timeout_seconds: float | None = None  # None: wait until the platform gives up
    max_idle_iterations: int = 30  # consecutive loop passes with no new pods

    # Persisted logs
    bucket_read_timeout_seconds: float = 20.0

    # Output
    color: bool = True

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"
