"""Configuration settings for match presentation."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MatchingConfig(BaseSettings):
    """Matching configuration settings.

    Scores themselves follow a fixed formula; these settings only control
    how scores are labelled for display. Override via environment variables
    with the `MATCHING_` prefix or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="MATCHING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    strong_match_threshold: Annotated[int, Field(ge=0, le=100)] = Field(
        default=70,
        description="Minimum score labelled as a strong match",
    )
    good_match_threshold: Annotated[int, Field(ge=0, le=100)] = Field(
        default=50,
        description="Minimum score labelled as a good match",
    )

    @model_validator(mode="after")
    def validate_threshold_order(self) -> MatchingConfig:
        """Ensure the strong threshold is not below the good threshold."""
        if self.strong_match_threshold < self.good_match_threshold:
            raise ValueError(
                "strong_match_threshold must be >= good_match_threshold "
                f"(got strong={self.strong_match_threshold}, "
                f"good={self.good_match_threshold})."
            )
        return self


# Singleton instance for easy import
_matching_config: MatchingConfig | None = None


def get_matching_config() -> MatchingConfig:
    """Get the matching configuration singleton."""
    global _matching_config
    if _matching_config is None:
        _matching_config = MatchingConfig()
    return _matching_config


def reset_matching_config() -> None:
    """Reset the matching configuration singleton (useful for testing)."""
    global _matching_config
    _matching_config = None
