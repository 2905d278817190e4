"""Application configuration."""

import os
from typing import List, Literal, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "OrElse"
    APP_ENV: str = "development"
    DEBUG: bool = False  # Secure default: disabled
    API_PREFIX: str = "/api"

    # Identity provider - tokens are signed with a shared secret
    AUTH_SECRET: str  # Required - no default
    AUTH_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 30

    # Database - Credentials must come from environment
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "orelse"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "orelse"

    # Database pool configuration
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_RECYCLE: int = 3600

    @field_validator("AUTH_SECRET")
    @classmethod
    def validate_auth_secret(cls, v: str) -> str:
        """Ensure AUTH_SECRET is secure."""
        if len(v) < 32:
            raise ValueError("AUTH_SECRET must be at least 32 characters")
        if v in ["your-secret-key-change-in-production", "changeme", "secret"]:
            raise ValueError("AUTH_SECRET must not be a default/weak value")
        return v

    @property
    def DATABASE_URL(self) -> str:
        """Build async database URL. Uses DATABASE_URL env var if set."""
        external = os.environ.get("DATABASE_URL", "")
        if external:
            if external.startswith("postgresql://"):
                return external.replace("postgresql://", "postgresql+asyncpg://", 1)
            return external
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    # CORS - Restricted methods and headers
    # Override with comma-separated env var: CORS_ORIGINS=https://orelse.app,https://www.orelse.app
    CORS_ORIGINS: Union[str, List[str]] = "http://localhost:3000,http://127.0.0.1:3000"

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    CORS_ALLOWED_METHODS: List[str] = ["GET", "POST", "PATCH", "OPTIONS"]
    CORS_ALLOWED_HEADERS: List[str] = [
        "Authorization",
        "Content-Type",
        "Accept",
        "Origin",
        "X-Requested-With",
    ]

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 60
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"

    # Public goal feed
    GOAL_FEED_LIMIT: int = 20

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
