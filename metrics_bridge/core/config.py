"""Environment driven settings for the reporter."""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Reporter configuration read from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="METRICS_BRIDGE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="INFO")
    log_format: str = Field(default="%(levelname)s %(name)s %(message)s")
    log_propagate: bool = Field(default=True)

    # Reporter defaults
    report_interval: float = Field(default=1.0)
    prefix: str = Field(default="")
    add_suffix: bool = Field(default=True)
    auto_start: bool = Field(default=True)
    log_errors: bool = Field(default=False)
    source: str | None = Field(default=None)
    runtime_metrics: bool = Field(default=False)

    # Application identity attached to every emission
    application: str = Field(default="metrics-bridge")
    service: str = Field(default="reporter")
    cluster: str | None = Field(default=None)
    shard: str | None = Field(default=None)


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of the application settings."""

    return Settings()
