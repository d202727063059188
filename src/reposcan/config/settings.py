"""Application settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    log_level: str = "INFO"

    # Redis settings
    redis_url: str = "redis://localhost:6379/0"
    usage_key_ttl_days: int = 7

    # Monthly plan prices
    plan_price_starter: float = 0
    plan_price_pro: float = 49
    plan_price_business: float = 99
    plan_price_enterprise: float = 299


@lru_cache
def get_settings() -> Settings:
    return Settings()
