# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Notification rendering.

Turns ``(recipient, event, complaint)`` into subject, plain-text and HTML
bodies using the Jinja2 layouts in ``layouts``. Output depends only on its
inputs and the cached branding, so the same event rendered twice for the
same recipient is byte-identical.

Free-text fields (the event comment, activity comments, file names) are
clipped before rendering so that a long remark shortens the message instead
of failing it. The length checks in ``_validate`` still guard the result.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from jinja2 import Environment

from complaint_broadcast.core.exceptions import RecipientRenderError
from complaint_broadcast.models.domain import (
    BroadcastEvent,
    ComplaintSnapshot,
    Recipient,
    RenderedMessage,
    Role,
)
from complaint_broadcast.services.branding import Branding, CachedBranding
from complaint_broadcast.services.layouts import HTML_LAYOUT, TEXT_LAYOUT, build_environment
from complaint_broadcast.services.templates import (
    MAX_COMMENT_LENGTH,
    MAX_HTML_LENGTH,
    MAX_LISTED_ATTACHMENTS,
    MAX_LOG_COMMENT_LENGTH,
    MAX_SUBJECT_LENGTH,
    MAX_TEXT_LENGTH,
    TRUNCATION_MARKER,
    TemplateRegistry,
    priority_color,
    status_color,
)

NOT_SPECIFIED = "Not specified"
MAX_FILE_NAME_LENGTH = 120
ATTACHMENT_KEYS = ("attachments", "resolution_photos")


def _fmt_date(value: Optional[datetime]) -> str:
    return value.strftime("%d/%m/%Y") if value else NOT_SPECIFIED


def truncate(value: Optional[str], limit: int) -> str:
    """Clip *value* to at most *limit* characters, marking the cut."""
    if not value:
        return ""
    if len(value) <= limit:
        return value
    return value[:max(limit - len(TRUNCATION_MARKER), 0)] + TRUNCATION_MARKER


class TemplateRenderer:
    def __init__(self, registry: TemplateRegistry, branding: CachedBranding,
                 environment: Optional[Environment] = None) -> None:
        self._registry = registry
        self._branding = branding
        self._env = environment or build_environment()

    def render(self, recipient: Recipient, event: BroadcastEvent,
               complaint: ComplaintSnapshot) -> RenderedMessage:
        try:
            branding = self._branding.get()
            status_message = self._registry.status_message(
                recipient.template.template_kind, recipient.language, event.new_status,
            )
            message = RenderedMessage(
                subject=self.render_subject(recipient, event, complaint, branding),
                text=self.render_text(recipient, event, complaint, status_message, branding),
                html=self.render_html(recipient, event, complaint, status_message, branding),
            )
        except RecipientRenderError:
            raise
        except Exception as exc:
            raise RecipientRenderError(recipient.email, str(exc)) from exc
        self._validate(recipient, message)
        return message

    # ── Subject ──

    def render_subject(self, recipient: Recipient, event: BroadcastEvent,
                       complaint: ComplaintSnapshot, branding: Branding) -> str:
        template = self._registry.subject_template(recipient.role, recipient.language)
        return (
            template
            .replace("{complaintId}", complaint.display_id)
            .replace("{status}", event.new_status.value)
            .replace("{appName}", branding.app_name)
        )

    # ── Bodies ──

    def render_text(self, recipient: Recipient, event: BroadcastEvent,
                    complaint: ComplaintSnapshot, status_message: str,
                    branding: Branding) -> str:
        context = self._context(recipient, event, complaint, status_message, branding)
        return self._env.get_template(TEXT_LAYOUT).render(**context)

    def render_html(self, recipient: Recipient, event: BroadcastEvent,
                    complaint: ComplaintSnapshot, status_message: str,
                    branding: Branding) -> str:
        context = self._context(recipient, event, complaint, status_message, branding)
        return self._env.get_template(HTML_LAYOUT).render(**context)

    def _context(self, recipient: Recipient, event: BroadcastEvent,
                 complaint: ComplaintSnapshot, status_message: str,
                 branding: Branding) -> Dict[str, Any]:
        template = recipient.template
        changed = event.previous_status and event.previous_status != event.new_status
        return {
            "language": recipient.language,
            "greeting_name": recipient.full_name or recipient.email,
            "status_message": status_message,
            "display_id": complaint.display_id,
            "complaint_type": complaint.type or "General",
            "status": event.new_status.value,
            "status_color": status_color(event.new_status),
            "priority": complaint.priority.value,
            "priority_color": priority_color(complaint.priority),
            "area": complaint.area or NOT_SPECIFIED,
            "submitted": _fmt_date(complaint.submitted_on),
            "ward_name": complaint.ward.name if complaint.ward else "",
            "sub_zone_name": complaint.sub_zone.name if complaint.sub_zone else "",
            "previous_status": event.previous_status.value if changed else "",
            "remarks": (
                truncate(event.comment, MAX_COMMENT_LENGTH)
                if template.show_internal_comments else ""
            ),
            "assignment": self._assignment_lines(complaint) if template.show_assignment_details else [],
            "contact": self._citizen_contact(complaint) if template.show_citizen_info else [],
            "activity": self._activity(complaint) if template.show_maintenance_logs else [],
            "attachments": self._attachments(event) if template.show_maintenance_logs else [],
            "show_tracking_tip": recipient.role == Role.CITIZEN,
            "app_name": branding.app_name,
            "org_name": branding.org_name,
            "logo_url": branding.logo_url,
            "website_url": branding.website_url,
            "support_email": branding.support_email,
        }

    # ── Helpers ──

    @staticmethod
    def _assignment_lines(complaint: ComplaintSnapshot):
        lines = []
        if complaint.ward_officer:
            lines.append(("Ward Officer", complaint.ward_officer.full_name))
        if complaint.maintenance_team:
            lines.append(("Maintenance Team", complaint.maintenance_team.full_name))
        return lines

    @staticmethod
    def _citizen_contact(complaint: ComplaintSnapshot):
        citizen = complaint.submitted_by
        name = complaint.contact_name or (citizen.full_name if citizen else None)
        email = complaint.contact_email or (citizen.email if citizen else None)
        phone = complaint.contact_phone or (citizen.phone_number if citizen else None)
        return [
            (label, value) for label, value in (
                ("Name", name), ("Email", email), ("Phone", phone),
            ) if value
        ]

    @staticmethod
    def _activity(complaint: ComplaintSnapshot) -> List[str]:
        entries = []
        for log in complaint.status_logs:
            change = log.to_status.value
            if log.from_status:
                change = f"{log.from_status.value} -> {change}"
            entry = f"{log.timestamp.strftime('%d/%m/%Y %H:%M')} {change}"
            if log.user and log.user.full_name:
                entry += f" by {log.user.full_name}"
            if log.comment:
                entry += f": {truncate(log.comment, MAX_LOG_COMMENT_LENGTH)}"
            entries.append(entry)
        return entries

    @staticmethod
    def _attachments(event: BroadcastEvent) -> List[str]:
        names = []
        for key in ATTACHMENT_KEYS:
            for ref in event.additional_data.get(key) or []:
                if not isinstance(ref, dict):
                    continue
                name = ref.get("original_name") or ref.get("file_name") or ref.get("id")
                if name:
                    names.append(truncate(str(name), MAX_FILE_NAME_LENGTH))
        return names[:MAX_LISTED_ATTACHMENTS]

    @staticmethod
    def _validate(recipient: Recipient, message: RenderedMessage) -> None:
        if len(message.subject) > MAX_SUBJECT_LENGTH:
            raise RecipientRenderError(recipient.email, "subject exceeds maximum length")
        if len(message.text) > MAX_TEXT_LENGTH:
            raise RecipientRenderError(recipient.email, "text body exceeds maximum length")
        if len(message.html) > MAX_HTML_LENGTH:
            raise RecipientRenderError(recipient.email, "html body exceeds maximum length")
