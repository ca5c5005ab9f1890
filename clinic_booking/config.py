from typing import List, Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./clinic.db"
    database_echo: bool = False

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: List[str] = ["*"]

    # Bearer tokens
    access_token_secret: str = "change-me"
    access_token_expire_minutes: int = 60

    # Payments
    stripe_secret_key: Optional[str] = None
    payment_currency: str = "usd"

    # Staff notifications (Telegram)
    telegram_bot_token: Optional[str] = None
    notify_chat_id: Optional[int] = None

    # Reject bookings whose slot is not in the treatment's catalog
    enforce_slot_validity: bool = True

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
