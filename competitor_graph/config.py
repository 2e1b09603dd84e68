"""
Configuration management for competitor_graph.

Uses pydantic-settings for type-safe configuration with automatic
environment variable loading and validation.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every setting has a default so a bare checkout can compile the
    bundled data directory without any configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars
    )

    # Inputs
    survey_dir: Path = Field(
        default=Path("data/competitor_searches"),
        description="Directory containing one JSON survey file per company per year",
    )
    financials_file: Path | None = Field(
        default=Path("data/financials.json"),
        description="Optional financial metadata table keyed by slug",
    )

    # Output
    output_file: Path = Field(
        default=Path("data.js"),
        description="Generated graph artifact loaded by the viewer",
    )
    output_format: Literal["js", "json"] = Field(
        default="js",
        description="'js' wraps the graph in a script assignment, 'json' writes it bare",
    )

    # Logging
    log_dir: Path = Field(
        default=Path("logs"),
        description="Directory for per-run log files",
    )

    @field_validator("financials_file", mode="before")
    @classmethod
    def empty_string_to_none(cls, v: str | Path | None) -> str | Path | None:
        """Convert empty strings to None for optional fields."""
        if isinstance(v, str):
            v = v.strip()
            return v if v else None
        return v

    @field_validator("output_format", mode="before")
    @classmethod
    def lowercase_format(cls, v: str) -> str:
        """Accept JS/JSON in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


def get_survey_dir() -> Path:
    """Get the survey directory from settings."""
    return get_settings().survey_dir


def get_financials_file() -> Path | None:
    """Get the financial metadata file from settings (optional)."""
    return get_settings().financials_file


def get_output_file() -> Path:
    """Get the output artifact path from settings."""
    return get_settings().output_file


def get_output_format() -> str:
    """Get the output artifact format ('js' or 'json')."""
    return get_settings().output_format


def get_log_dir() -> Path:
    """Get the log directory from settings."""
    return get_settings().log_dir


# Data paths - not loaded from env, computed from package location


def get_data_dir() -> Path:
    """
    Get data directory path (project root / data).

    Public helper for locating the bundled data from outside the working
    directory; the settings defaults are relative to the current directory.
    """
    project_root = Path(__file__).parent.parent
    return project_root / "data"
