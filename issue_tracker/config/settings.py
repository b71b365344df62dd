"""Application configuration settings."""
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class _EnvSettings(BaseSettings):
    """Settings group read from the environment and ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )


class DatabaseSettings(_EnvSettings):
    """Database configuration."""

    url: str = Field(
        default="sqlite+aiosqlite:///./issue_tracker.db",
        validation_alias="DATABASE_URL"
    )
    echo: bool = Field(default=False, validation_alias="DATABASE_ECHO")
    pool_size: int = Field(default=10, validation_alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(default=20, validation_alias="DATABASE_MAX_OVERFLOW")


class AuthSettings(_EnvSettings):
    """Authentication configuration."""

    secret_key: str = Field(
        default="your-secret-key-change-in-production",
        validation_alias="AUTH_SECRET_KEY"
    )
    algorithm: str = Field(default="HS256", validation_alias="AUTH_ALGORITHM")
    issuer: str = Field(default="issueTrackingTool", validation_alias="AUTH_ISSUER")
    access_token_expire_minutes: int = Field(
        default=24 * 60, validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES"
    )
    reset_token_expire_minutes: int = Field(
        default=15, validation_alias="RESET_TOKEN_EXPIRE_MINUTES"
    )
    verification_token_expire_hours: int = Field(
        default=48, validation_alias="VERIFICATION_TOKEN_EXPIRE_HOURS"
    )


class MailSettings(_EnvSettings):
    """Outbound mail configuration."""

    backend: str = Field(default="console", validation_alias="MAIL_BACKEND")  # console, smtp
    sender: str = Field(default="no-reply@issuetracker.local", validation_alias="MAIL_SENDER")
    smtp_host: str = Field(default="localhost", validation_alias="SMTP_HOST")
    smtp_port: int = Field(default=465, validation_alias="SMTP_PORT")
    smtp_user: str = Field(default="", validation_alias="SMTP_USER")
    smtp_password: str = Field(default="", validation_alias="SMTP_PASSWORD")
    smtp_use_ssl: bool = Field(default=True, validation_alias="SMTP_USE_SSL")
    frontend_url: str = Field(default="http://localhost:4200", validation_alias="FRONTEND_URL")


class APISettings(_EnvSettings):
    """API configuration."""

    title: str = "Issue Tracker"
    description: str = "Issue tracking backend with users, issues and comments"
    version: str = "1.0.0"
    prefix: str = "/api/v1"
    host: str = Field(default="0.0.0.0", validation_alias="API_HOST")
    port: int = Field(default=8000, validation_alias="API_PORT")
    reload: bool = Field(default=False, validation_alias="API_RELOAD")
    workers: int = Field(default=1, validation_alias="API_WORKERS")

    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:4200", "http://localhost:3000"],
        validation_alias="CORS_ORIGINS"
    )


class MonitoringSettings(_EnvSettings):
    """Logging configuration."""

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


class Settings(_EnvSettings):
    """Main application settings."""

    debug: bool = Field(default=False, validation_alias="DEBUG")

    # Sub-configurations
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    mail: MailSettings = Field(default_factory=MailSettings)
    api: APISettings = Field(default_factory=APISettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)


# Global settings instance
settings = Settings()
