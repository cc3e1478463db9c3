# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Settings read from the environment once, at import.
"""

import os


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "complaint-broadcast")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8005"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")

    # ── Database (empty URL → in-memory complaint store) ──
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "5"))
    DB_POOL_RECYCLE: int = int(os.getenv("DB_POOL_RECYCLE", "300"))

    # ── Broadcasting ──
    EMAIL_BROADCAST_ENABLED: bool = _flag("EMAIL_BROADCAST_ENABLED", "true")
    EMAIL_PREVIEW_ONLY: bool = _flag("EMAIL_PREVIEW_ONLY", "false")
    EMAIL_TRANSPORT: str = os.getenv("EMAIL_TRANSPORT", "log").lower()
    EMAIL_SEND_TIMEOUT: float = float(os.getenv("EMAIL_SEND_TIMEOUT", "10.0"))
    EMAIL_FROM: str = os.getenv("EMAIL_FROM", "Fix_Smart_CMS <no-reply@fix-smart-cms.gov.in>")
    EMAIL_TEMPLATE_DEFAULT_LANGUAGE: str = os.getenv("EMAIL_TEMPLATE_DEFAULT_LANGUAGE", "en")
    MAIL_RELAY_URL: str = os.getenv("MAIL_RELAY_URL", "")
    MAIL_RELAY_TOKEN: str = os.getenv("MAIL_RELAY_TOKEN", "")

    # ── Branding fallbacks ──
    APP_NAME: str = os.getenv("APP_NAME", "Fix_Smart_CMS")
    ORGANIZATION_NAME: str = os.getenv("ORGANIZATION_NAME", "Ahmedabad Municipal Corporation")
    APP_LOGO_URL: str = os.getenv("APP_LOGO_URL", "")
    WEBSITE_URL: str = os.getenv("WEBSITE_URL", "https://fix-smart-cms.gov.in")
    SUPPORT_EMAIL: str = os.getenv("SUPPORT_EMAIL", "support@fix-smart-cms.gov.in")


settings = Settings()
