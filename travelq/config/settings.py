"""
Configuration Management for the TravelQ report

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: The defaults ARE the report: data/travelq.csv, ten trips,
abort on the first failure. Nothing needs to be set to get the standard
run; the TRAVELQ_ variables exist for logging and for reuse of the
pipeline on other extracts.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ErrorPolicy(str, Enum):
    """
    What the pipeline does with a row or trip it cannot process.

    ABORT stops the run at the first failure.
    SKIP logs the failure and moves on.
    COLLECT moves on too, but hands the failures back to the caller.
    """
    ABORT = "abort"
    SKIP = "skip"
    COLLECT = "collect"


class BatchSettings(BaseSettings):
    """
    Batch report settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRAVELQ_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Input
    input_path: Path = Field(
        default=Path("data/travelq.csv"),
        description="CSV export to read, relative to the working directory"
    )
    record_limit: int = Field(
        default=10,
        ge=1,
        description="Number of row positions to read from the top of the file"
    )
    error_policy: ErrorPolicy = Field(
        default=ErrorPolicy.ABORT,
        description="How row and date failures are handled"
    )

    # Output
    author: str = Field(
        default="Morgan Bakelmun",
        min_length=1,
        description="Name printed in the report banner"
    )

    # Logging (stderr only)
    log_level: str = Field(
        default="WARNING",
        description="Minimum level for structured log events"
    )
    log_json: bool = Field(
        default=True,
        description="Render log events as JSON lines (False: console renderer)"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept the standard logging level names."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {sorted(allowed)}")
        return v.upper()


@lru_cache()
def get_settings() -> BatchSettings:
    """
    Get batch settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return BatchSettings()
