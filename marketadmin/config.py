from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str

    # JWT verification (tokens are issued by the external auth provider)
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Application
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Pagination
    DEFAULT_PAGE_SIZE: int = 25
    MAX_PAGE_SIZE: int = 100

    # Moderation policy
    WARNING_THRESHOLD: int = 3
    MAX_CUSTOM_SUSPENSION_DAYS: int = 365

    # Email Configuration
    EMAIL_NOTIFICATIONS_ENABLED: bool = False
    SMTP_SERVER: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: Optional[str] = None
    EMAIL_FROM: Optional[str] = None
    EMAIL_PASSWORD: Optional[str] = None
    SMTP_USE_TLS: bool = True
    SMTP_USE_SSL: bool = False
    SMTP_TIMEOUT_SECONDS: int = 8

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def public_view(self) -> dict:
        """Settings safe to show to a super admin (no secrets, no DSN)."""
        return {
            "app_env": self.APP_ENV,
            "debug": self.DEBUG,
            "log_level": self.LOG_LEVEL,
            "default_page_size": self.DEFAULT_PAGE_SIZE,
            "max_page_size": self.MAX_PAGE_SIZE,
            "warning_threshold": self.WARNING_THRESHOLD,
            "max_custom_suspension_days": self.MAX_CUSTOM_SUSPENSION_DAYS,
            "email_notifications_enabled": self.EMAIL_NOTIFICATIONS_ENABLED,
            "smtp_server": self.SMTP_SERVER,
            "email_from": self.EMAIL_FROM,
        }


settings = Settings()
