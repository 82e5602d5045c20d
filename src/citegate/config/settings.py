"""Configuration management using Pydantic Settings."""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_prefix="CITEGATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field("INFO")
    log_format: str = Field("json", pattern="^(json|text)$")

    # Date plausibility window (inclusive)
    min_plausible_year: int = Field(1800, description="Earliest year accepted without a warning")
    max_plausible_year: int = Field(2100, description="Latest year accepted without a warning")

    # Uncertainty region thresholds and severities
    low_certainty_threshold: float = Field(0.4, ge=0.0, le=1.0)
    low_certainty_severity: float = Field(0.8, ge=0.0, le=1.0)
    missing_identifier_severity: float = Field(0.6, ge=0.0, le=1.0)
    temporal_severity: float = Field(0.5, ge=0.0, le=1.0)
    contradiction_region_severity: float = Field(0.9, ge=0.0, le=1.0)

    # Contradiction hints
    contradiction_confidence: float = Field(
        0.6,
        ge=0.0,
        le=1.0,
        description="Heuristic confidence attached to every title-match contradiction hint",
    )

    # Export and epistemic gap heuristics
    export_certainty_floor: float = Field(0.7, ge=0.0, le=1.0)
    temporal_gap_years: int = Field(25, ge=1)
    ambiguous_ratio: float = Field(0.5, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_year_window(self) -> "Settings":
        if self.min_plausible_year >= self.max_plausible_year:
            raise ValueError("min_plausible_year must be lower than max_plausible_year")
        return self


# Instantiate global settings
settings = Settings()
