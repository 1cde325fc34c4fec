# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    DATABASE_URL: str = "sqlite:///./newsworthy.db"

    STRIPE_SECRET_KEY: str = ""
    STRIPE_WEBHOOK_SECRET: str = ""
    # Max age (seconds) of a signed webhook timestamp
    STRIPE_WEBHOOK_TOLERANCE: int = 300
    STRIPE_CURRENCY: str = "usd"

    # Public dashboard URL used for Stripe success/cancel redirects
    FRONTEND_URL: str = "http://localhost:3000"
    DEFAULT_PARTNER_ID: int = 1

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
