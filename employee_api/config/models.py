from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RetrySettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    max_attempts: int = Field(3, ge=1)
    initial_delay_ms: int = Field(1000, ge=0)
    max_delay_ms: int = Field(5000, ge=0)
    multiplier: float = Field(2.0, ge=1.0)

    @model_validator(mode="after")
    def _check_delay_bounds(self) -> "RetrySettings":
        if self.max_delay_ms < self.initial_delay_ms:
            raise ValueError("max_delay_ms must be >= initial_delay_ms")
        return self

    @property
    def initial_delay(self) -> float:
        """Initial backoff in seconds."""
        return self.initial_delay_ms / 1000

    @property
    def max_delay(self) -> float:
        """Backoff ceiling in seconds."""
        return self.max_delay_ms / 1000


class UpstreamSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    base_url: str = "http://localhost:8112/api/v1/employee"
    connect_timeout_ms: int = Field(5000, gt=0)
    read_timeout_ms: int = Field(10000, gt=0)
    retry: RetrySettings = RetrySettings()


class LoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseModel):
    """Top-level application settings (immutable once loaded)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    upstream: UpstreamSettings = UpstreamSettings()
    logging: LoggingSettings = LoggingSettings()
