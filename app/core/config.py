# app/core/config.py - Environment driven settings

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str

    # JWT issued by the auth provider, verified with a shared secret
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    JWT_AUDIENCE: Optional[str] = None

    # Admin console
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None
    ADMIN_COOKIE_SECRET: str = "change-me"

    # Outbound mail relay
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_EMAIL: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    EMAIL_SENDER: Optional[str] = None

    # Invoices
    INVOICE_DIR: str = "invoices"
    STORE_NAME: str = "Smart Cart"

    CORS_ORIGINS: str = "*"
    PORT: int = 8900
    LOG_LEVEL: str = "INFO"

    @property
    def cors_origins(self):
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
