# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Organization branding used in rendered notifications.

Branding is looked up once and cached; any failure falls back to the static
defaults from settings so rendering never depends on the config store.
"""

from typing import Optional, Protocol

from pydantic import BaseModel

from complaint_broadcast.core.config import settings
from complaint_broadcast.core.logging import get_logger
from complaint_broadcast.repositories.system_config_repository import SystemConfigRepository

logger = get_logger(__name__)


class Branding(BaseModel):
    app_name: str
    org_name: str
    logo_url: Optional[str] = None
    website_url: Optional[str] = None
    support_email: Optional[str] = None


DEFAULT_BRANDING = Branding(
    app_name=settings.APP_NAME,
    org_name=settings.ORGANIZATION_NAME,
    logo_url=settings.APP_LOGO_URL or None,
    website_url=settings.WEBSITE_URL or None,
    support_email=settings.SUPPORT_EMAIL or None,
)


class BrandingSource(Protocol):
    def get_app_name(self) -> str:
        ...

    def get_org_name(self) -> str:
        ...

    def get_logo_url(self) -> Optional[str]:
        ...


class SettingsBranding:
    """Branding straight from environment settings."""

    def get_app_name(self) -> str:
        return DEFAULT_BRANDING.app_name

    def get_org_name(self) -> str:
        return DEFAULT_BRANDING.org_name

    def get_logo_url(self) -> Optional[str]:
        return DEFAULT_BRANDING.logo_url


class SystemConfigBranding:
    """Branding from the ``system_config`` table, falling back per key."""

    KEYS = ("APP_NAME", "ORGANIZATION_NAME", "APP_LOGO_URL")

    def __init__(self, repo: SystemConfigRepository) -> None:
        self._repo = repo

    def _values(self) -> dict:
        return self._repo.get_values(self.KEYS)

    def get_app_name(self) -> str:
        return self._values().get("APP_NAME") or DEFAULT_BRANDING.app_name

    def get_org_name(self) -> str:
        return self._values().get("ORGANIZATION_NAME") or DEFAULT_BRANDING.org_name

    def get_logo_url(self) -> Optional[str]:
        return self._values().get("APP_LOGO_URL") or DEFAULT_BRANDING.logo_url


class CachedBranding:
    """Resolve a ``BrandingSource`` into a ``Branding`` snapshot on first use."""

    def __init__(self, source: BrandingSource) -> None:
        self._source = source
        self._branding: Optional[Branding] = None

    def get(self) -> Branding:
        if self._branding is None:
            self._branding = self._load()
        return self._branding

    def _load(self) -> Branding:
        try:
            return DEFAULT_BRANDING.model_copy(update={
                "app_name": self._source.get_app_name() or DEFAULT_BRANDING.app_name,
                "org_name": self._source.get_org_name() or DEFAULT_BRANDING.org_name,
                "logo_url": self._source.get_logo_url() or DEFAULT_BRANDING.logo_url,
            })
        except Exception as exc:
            logger.warning("Failed to load branding, using defaults: %s", exc)
            return DEFAULT_BRANDING

    def refresh(self) -> Branding:
        self._branding = None
        return self.get()
