"""Application configuration with validation."""
from typing import Optional, Literal
from functools import lru_cache
from pathlib import Path
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Authority Scoring Engine"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # API
    MAX_RAW_TEXT_CHARS: int = Field(default=200_000, ge=1_000, le=2_000_000)

    # Static scoring configuration (dimensions + domain profiles).
    # Unset means the built-in product configuration.
    SCORING_CONFIG_PATH: Optional[str] = None

    # Tracking-compliance penalty
    COMPLIANCE_MAX_PENALTY: float = Field(default=20.0, ge=0, le=50)
    COMPLIANCE_FAILURE_THRESHOLD: float = Field(default=0.7, gt=0, le=1)
    COMPLIANCE_MIN_TRACKED_DAYS: int = Field(default=7, ge=1, le=30)

    @field_validator("SCORING_CONFIG_PATH")
    @classmethod
    def validate_scoring_config_path(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        if v is not None and not Path(v).is_file():
            raise ValueError(f"SCORING_CONFIG_PATH does not exist: {v}")
        return v

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production does not run in debug mode."""
        if self.APP_ENV == "production" and self.DEBUG:
            raise ValueError("DEBUG must be False in production")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
