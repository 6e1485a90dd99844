"""
Configuration management for ae_triage.

Uses pydantic-settings for environment variable loading and validation.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HIGH_RISK_CONDITIONS = [
    "breathing difficulty",
    "chest pain",
    "unconsciousness",
    "severe allergic reaction",
    "high fever",
    "low oxygen levels",
    "severe headache",
    "severe dehydration",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="AE_TRIAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # openFDA adverse event feed
    openfda_url: str = Field(
        default="https://api.fda.gov/drug/event.json",
        description="openFDA drug event endpoint",
    )
    openfda_api_key: str | None = Field(default=None, description="Optional openFDA API key")
    openfda_search: str | None = Field(
        default=None,
        description="Optional openFDA search expression (e.g. serious:1)",
    )
    fetch_limit: int = Field(default=5, ge=0, le=1000, description="Reports fetched per analysis")
    request_timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")
    retry_attempts: int = Field(default=3, ge=1, description="Attempts per corpus fetch")

    # Matching
    similarity: Literal["levenshtein", "token_sort", "exact"] = Field(
        default="levenshtein",
        description="Similarity strategy used by the fuzzy matcher",
    )
    match_threshold: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Maximum normalized distance for a reaction match",
    )

    # Risk scoring
    high_risk_conditions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_HIGH_RISK_CONDITIONS),
        description="Condition phrases counted towards the risk score",
    )

    # AWS Comprehend Medical
    aws_region: str = Field(default="us-east-1", description="Comprehend Medical region")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("high_risk_conditions")
    @classmethod
    def _fold_conditions(cls, value: list[str]) -> list[str]:
        return [term.strip().lower() for term in value if term.strip()]


# Global settings instance
settings = Settings()
