"""Application settings and configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Stock Trading Service"
    environment: str = "development"
    log_level: str = "INFO"

    # Service time zone (IANA name). Unset means the server's local time zone.
    timezone: Optional[str] = None

    # Vendor API
    vendor_api_base_url: str = "http://localhost:4000"
    vendor_api_key: str = ""
    api_timeout: int = 30000  # milliseconds, per attempt
    api_retry_attempts: int = 3
    api_retry_base_delay_seconds: float = 1.0
    # Serve a fixed in-process listing instead of calling the vendor
    vendor_stub: bool = False

    # Trading rules
    cache_ttl_seconds: int = 300
    max_price_deviation_percent: float = 2.0

    # Daily report delivery
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_use_tls: bool = True
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    email_from: Optional[str] = None
    email_to: Optional[str] = None
    daily_report_enabled: bool = False
    daily_report_time: str = "09:00"

    @property
    def api_timeout_seconds(self) -> float:
        """Per-request vendor timeout in seconds."""
        return self.api_timeout / 1000

    def get_email_recipients(self) -> list[str]:
        """Split the comma separated EMAIL_TO value."""
        if not self.email_to:
            return []
        return [addr.strip() for addr in self.email_to.split(",") if addr.strip()]


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (used by tests)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
