# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./storefront.db"

    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    # Send the session cookie over HTTPS only
    COOKIE_SECURE: bool = False

    # "development" exposes stack traces in 500 responses
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"
    FRONTEND_URL: Optional[str] = None

    # Registering with this code grants admin rights
    ADMIN_SECRET_CODE: Optional[str] = None

    # Connection pool (ignored for SQLite)
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 10

    PRODUCT_PAGE_MAX: int = 100
    BULK_BATCH_SIZE: int = 5
    RETRY_ATTEMPTS: int = 3
    RETRY_BACKOFF_SECONDS: float = 0.2

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

settings = Settings()
