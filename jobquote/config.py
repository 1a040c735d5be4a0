"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings
from pydantic import field_validator
from functools import lru_cache


class Settings(BaseSettings):
    # App
    app_name: str = "JobQuote"
    app_env: str = "development"
    secret_key: str = "jobquote-dev-key-change-me"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = ["*"]

    # Auth
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days
    algorithm: str = "HS256"

    # Database
    database_url: str = "sqlite+aiosqlite:///./jobquote.db"
    database_echo: bool = False

    @field_validator("database_url", mode="before")
    @classmethod
    def fix_db_url(cls, v: str) -> str:
        # Heroku/Railway style URLs need the asyncpg driver prefix
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql+asyncpg://", 1)
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    # Estimation
    default_hourly_rate: float = 120.0
    min_hourly_rate: float = 30.0
    max_hourly_rate: float = 300.0
    gst_rate: float = 0.10
    catalog_path: str = ""  # optional JSON trade catalog, built-in list when empty

    # Email (Resend API preferred, SMTP fallback)
    resend_api_key: str = ""
    resend_api_url: str = "https://api.resend.com/emails"
    quote_sender_email: str = "quote@jobquote.app"
    approval_base_url: str = "https://jobquote.app/quote-approval"
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""

    # Invoices
    invoice_due_days: int = 7

    model_config = {"env_file": None}


@lru_cache
def get_settings() -> Settings:
    return Settings()
