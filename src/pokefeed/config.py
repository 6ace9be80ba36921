"""Configuration settings for Pokefeed."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # PokeAPI Configuration
    pokeapi_base_url: str = Field(
        default="https://pokeapi.co/api/v2",
        description="PokeAPI base URL",
    )
    user_agent: str = Field(default="Pokefeed/1.0")
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    # Pagination Configuration
    page_size: int = Field(default=20, ge=1, le=100)

    # Detail fan-out Configuration (None = no limit)
    detail_concurrency: int | None = Field(default=None, ge=1)

    # Logging Configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )
    log_format: Literal["console", "json"] = Field(default="console")

    # Development
    debug: bool = Field(default=False)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
