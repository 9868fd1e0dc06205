"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict

from track_ingest.shared.constants import (
    DEFAULT_MAX_UPLOAD_BYTES,
    DEFAULT_SIMPLIFY_EPSILON_M,
)


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    log_level: str = Field(default="INFO", description="Logging level")

    # === Ingestion ===
    max_upload_bytes: int = Field(
        default=DEFAULT_MAX_UPLOAD_BYTES,
        description="Largest workout file accepted before parsing"
    )
    simplify_epsilon_m: float = Field(
        default=DEFAULT_SIMPLIFY_EPSILON_M,
        description="Douglas-Peucker tolerance for stored routes (meters)"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept any case, store upper-case."""
        return v.upper()

    @field_validator('max_upload_bytes')
    @classmethod
    def check_upload_limit(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("max_upload_bytes must be positive")
        return v

    @field_validator('simplify_epsilon_m')
    @classmethod
    def check_epsilon(cls, v: float) -> float:
        if v < 0:
            raise ValueError("simplify_epsilon_m must not be negative")
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
