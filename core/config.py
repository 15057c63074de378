"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Pause between two consecutive site audits
DEFAULT_PACING_DELAY_SECONDS = 5.0


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Report store root (holds countries.json and reports/)
    data_dir: Path = Path("data")

    # Audit source
    audit_source: Literal["pagespeed", "lighthouse", "mock"] = "lighthouse"
    audit_timeout_seconds: float = 120.0
    pacing_delay_seconds: float = Field(default=DEFAULT_PACING_DELAY_SECONDS, ge=0)

    # PageSpeed Insights
    pagespeed_api_key: str | None = None
    pagespeed_strategy: Literal["desktop", "mobile"] = "desktop"

    # Local Lighthouse CLI
    lighthouse_binary: str = "lighthouse"
    lighthouse_chrome_flags: str = "--headless --ignore-certificate-errors --no-sandbox"

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.env == "production"

    @property
    def is_test(self) -> bool:
        """Check if running in test mode."""
        return self.env == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
