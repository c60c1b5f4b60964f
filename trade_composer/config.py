"""
Centralized configuration using Pydantic Settings.

All environment variables are loaded and validated here.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Schema merging
    min_confidence_floor: float = 0.75
    max_tone_traits: int = 4
    max_follow_up_phrases: int = 6

    # Template composition
    # Report stripped placeholders as warnings instead of only listing them
    strict_placeholders: bool = False

    # Label taxonomy
    default_anchor: str = "MISC"


# Global settings instance
settings = Settings()
