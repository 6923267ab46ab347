from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables with CAPREST_ prefix."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./caprest.db"
    create_schema: bool = True
    # App
    debug: bool = False
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"
    # Pets
    pet_max_age: int = 10

    model_config = SettingsConfigDict(env_prefix="CAPREST_", env_file=".env")


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""
    return Settings()
