"""
Countries Configuration

Configuration settings using pydantic-settings for environment variable support.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CSV_URL = "https://datahub.io/core/country-codes/r/country-codes.csv"
DEFAULT_CSV_PATH = Path.home() / ".cache" / "countries" / "country-codes.csv"


class CountriesConfig(BaseSettings):
    """
    Configuration for the country table and resolver.

    Reads from environment variables with COUNTRIES_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="COUNTRIES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Table Source
    csv_url: str = Field(
        default=DEFAULT_CSV_URL,
        description="Where to download the country-codes CSV from",
    )
    csv_path: Path = Field(
        default=DEFAULT_CSV_PATH,
        description="Local copy of the country-codes CSV",
    )
    download_if_missing: bool = Field(
        default=True,
        description="Download the CSV when csv_path does not exist",
    )
    timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for the CSV download",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )


def load_config() -> CountriesConfig:
    """Load configuration from environment."""
    return CountriesConfig()
