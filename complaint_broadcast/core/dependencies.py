# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Builds the broadcast pipeline once and hands it to FastAPI routes.
"""

from complaint_broadcast.core.config import settings
from complaint_broadcast.core.database import engine
from complaint_broadcast.repositories.complaint_repository import (
    InMemoryComplaintStore,
    SqlComplaintStore,
)
from complaint_broadcast.repositories.system_config_repository import SystemConfigRepository
from complaint_broadcast.services.branding import CachedBranding, SettingsBranding, SystemConfigBranding
from complaint_broadcast.services.broadcast_service import BroadcastService
from complaint_broadcast.services.hooks import ComplaintEventHooks
from complaint_broadcast.services.mail_transport import build_transport
from complaint_broadcast.services.recipient_resolver import RecipientResolver
from complaint_broadcast.services.renderer import TemplateRenderer
from complaint_broadcast.services.templates import TemplateRegistry

# ── Collaborators ──
if engine is not None:
    _store = SqlComplaintStore(engine)
    _branding = CachedBranding(SystemConfigBranding(SystemConfigRepository(engine)))
else:
    _store = InMemoryComplaintStore()
    _branding = CachedBranding(SettingsBranding())
_transport = build_transport()

# ── Engine ──
_registry = TemplateRegistry(default_locale=settings.EMAIL_TEMPLATE_DEFAULT_LANGUAGE)
_resolver = RecipientResolver(_registry, _store)
_renderer = TemplateRenderer(_registry, _branding)
_broadcast_service = BroadcastService(_store, _resolver, _renderer, _transport)
_hooks = ComplaintEventHooks(_broadcast_service)


# ── FastAPI dependency functions ──
def get_complaint_store():
    return _store


def get_broadcast_service() -> BroadcastService:
    return _broadcast_service


def get_event_hooks() -> ComplaintEventHooks:
    return _hooks
