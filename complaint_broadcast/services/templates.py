# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Notification templates and localized message tables.

Everything here is static configuration, loaded once into a
``TemplateRegistry`` and shared read-only by the resolver and renderer.
Adding a role or a locale is a data change in this module only.
"""

from types import MappingProxyType
from typing import Dict, Mapping, Optional

from complaint_broadcast.models.domain import (
    NotificationTemplate,
    Priority,
    Role,
    Status,
    TemplateKind,
)

ALL_STATUSES = frozenset(Status)

# ── Per-role policy ───────────────────────────────────────────────────────
EMAIL_TEMPLATES: Dict[Role, NotificationTemplate] = {
    Role.CITIZEN: NotificationTemplate(
        allowed_statuses=frozenset({
            Status.REGISTERED, Status.ASSIGNED, Status.RESOLVED,
            Status.CLOSED, Status.REOPENED,
        }),
        template_kind=TemplateKind.CITIZEN,
        priority=1,
    ),
    Role.WARD_OFFICER: NotificationTemplate(
        allowed_statuses=ALL_STATUSES,
        show_internal_comments=True,
        show_assignment_details=True,
        show_maintenance_logs=True,
        show_citizen_info=True,
        template_kind=TemplateKind.STAFF,
        priority=2,
    ),
    Role.MAINTENANCE_TEAM: NotificationTemplate(
        allowed_statuses=frozenset({
            Status.ASSIGNED, Status.IN_PROGRESS, Status.RESOLVED,
            Status.CLOSED, Status.REOPENED,
        }),
        show_internal_comments=True,
        show_assignment_details=True,
        show_maintenance_logs=True,
        template_kind=TemplateKind.STAFF,
        priority=2,
    ),
    Role.ADMINISTRATOR: NotificationTemplate(
        allowed_statuses=ALL_STATUSES,
        show_internal_comments=True,
        show_assignment_details=True,
        show_maintenance_logs=True,
        show_citizen_info=True,
        template_kind=TemplateKind.ADMIN,
        priority=3,
    ),
}

# ── Status messages: kind → locale → status ──────────────────────────────
STATUS_MESSAGES: Dict[TemplateKind, Dict[str, Dict[Status, str]]] = {
    TemplateKind.CITIZEN: {
        "en": {
            Status.REGISTERED: "Your complaint has been registered successfully and is under review.",
            Status.ASSIGNED: "Your complaint has been assigned to our maintenance team for resolution.",
            Status.IN_PROGRESS: "Our team is actively working on resolving your complaint.",
            Status.RESOLVED: "Your complaint has been resolved. Please verify and provide feedback if satisfied.",
            Status.CLOSED: "Your complaint has been completed and closed. Thank you for using our service.",
            Status.REOPENED: "Your complaint has been reopened for further review and action.",
        },
        "hi": {
            Status.REGISTERED: "आपकी शिकायत सफलतापूर्वक दर्ज की गई है और समीक्षाधीन है।",
            Status.ASSIGNED: "आपकी शिकायत समाधान के लिए हमारी रखरखाव टीम को सौंपी गई है।",
            Status.IN_PROGRESS: "हमारी टीम आपकी शिकायत के समाधान पर सक्रिय रूप से काम कर रही है।",
            Status.RESOLVED: "आपकी शिकायत का समाधान हो गया है। कृपया सत्यापित करें और संतुष्ट होने पर फीडबैक दें।",
            Status.CLOSED: "आपकी शिकायत पूरी हो गई है और बंद कर दी गई है। हमारी सेवा का उपयोग करने के लिए धन्यवाद।",
            Status.REOPENED: "आपकी शिकायत को आगे की समीक्षा और कार्रवाई के लिए फिर से खोला गया है।",
        },
        "ml": {
            Status.REGISTERED: "നിങ്ങളുടെ പരാതി വിജയകരമായി രജിസ്റ്റർ ചെയ്യുകയും അവലോകനത്തിലാണ്.",
            Status.ASSIGNED: "നിങ്ങളുടെ പരാതി പരിഹാരത്തിനായി ഞങ്ങളുടെ മെയിന്റനൻസ് ടീമിനെ ഏൽപ്പിച്ചിരിക്കുന്നു.",
            Status.IN_PROGRESS: "ഞങ്ങളുടെ ടീം നിങ്ങളുടെ പരാതി പരിഹരിക്കുന്നതിൽ സജീവമായി പ്രവർത്തിക്കുന്നു.",
            Status.RESOLVED: "നിങ്ങളുടെ പരാതി പരിഹരിച്ചു. ദയവായി സ്ഥിരീകരിക്കുകയും സംതൃപ്തനാണെങ്കിൽ ഫീഡ്ബാക്ക് നൽകുകയും ചെയ്യുക.",
            Status.CLOSED: "നിങ്ങളുടെ പരാതി പൂർത്തിയാക്കി അടച്ചു. ഞങ്ങളുടെ സേവനം ഉപയോഗിച്ചതിന് നന്ദി.",
            Status.REOPENED: "കൂടുതൽ അവലോകനത്തിനും നടപടിക്കുമായി നിങ്ങളുടെ പരാതി വീണ്ടും തുറന്നിരിക്കുന്നു.",
        },
    },
    TemplateKind.STAFF: {
        "en": {
            Status.REGISTERED: "A new complaint has been registered and requires attention.",
            Status.ASSIGNED: "The complaint has been assigned for processing.",
            Status.IN_PROGRESS: "Work is currently in progress on this complaint.",
            Status.RESOLVED: "The complaint has been marked as resolved.",
            Status.CLOSED: "The complaint has been closed and completed.",
            Status.REOPENED: "The complaint has been reopened and requires further action.",
        },
        "hi": {
            Status.REGISTERED: "एक नई शिकायत दर्ज की गई है और ध्यान देने की आवश्यकता है।",
            Status.ASSIGNED: "शिकायत को प्रसंस्करण के लिए सौंपा गया है।",
            Status.IN_PROGRESS: "इस शिकायत पर वर्तमान में काम चल रहा है।",
            Status.RESOLVED: "शिकायत को हल के रूप में चिह्नित किया गया है।",
            Status.CLOSED: "शिकायत बंद कर दी गई है और पूरी हो गई है।",
            Status.REOPENED: "शिकायत को फिर से खोला गया है और आगे की कार्रवाई की आवश्यकता है।",
        },
        "ml": {
            Status.REGISTERED: "ഒരു പുതിയ പരാതി രജിസ്റ്റർ ചെയ്യുകയും ശ്രദ്ധ ആവശ്യപ്പെടുകയും ചെയ്തു.",
            Status.ASSIGNED: "പരാതി പ്രോസസ്സിംഗിനായി നിയോഗിച്ചിരിക്കുന്നു.",
            Status.IN_PROGRESS: "ഈ പരാതിയിൽ നിലവിൽ പ്രവർത്തനം പുരോഗമിക്കുന്നു.",
            Status.RESOLVED: "പരാതി പരിഹരിച്ചതായി അടയാളപ്പെടുത്തിയിരിക്കുന്നു.",
            Status.CLOSED: "പരാതി അടച്ച് പൂർത്തിയാക്കി.",
            Status.REOPENED: "പരാതി വീണ്ടും തുറക്കുകയും കൂടുതൽ നടപടി ആവശ്യപ്പെടുകയും ചെയ്തു.",
        },
    },
    TemplateKind.ADMIN: {
        "en": {
            Status.REGISTERED: "New complaint registered in the system.",
            Status.ASSIGNED: "Complaint has been assigned to appropriate team.",
            Status.IN_PROGRESS: "Complaint is currently being processed.",
            Status.RESOLVED: "Complaint has been resolved by the assigned team.",
            Status.CLOSED: "Complaint has been closed and completed.",
            Status.REOPENED: "Complaint has been reopened for additional work.",
        },
        "hi": {
            Status.REGISTERED: "सिस्टम में नई शिकायत दर्ज की गई।",
            Status.ASSIGNED: "शिकायत को उपयुक्त टीम को सौंपा गया है।",
            Status.IN_PROGRESS: "शिकायत वर्तमान में संसाधित की जा रही है।",
            Status.RESOLVED: "शिकायत को सौंपी गई टीम द्वारा हल किया गया है।",
            Status.CLOSED: "शिकायत बंद कर दी गई है और पूरी हो गई है।",
            Status.REOPENED: "अतिरिक्त कार्य के लिए शिकायत को फिर से खोला गया है।",
        },
        "ml": {
            Status.REGISTERED: "സിസ്റ്റത്തിൽ പുതിയ പരാതി രജിസ്റ്റർ ചെയ്തു.",
            Status.ASSIGNED: "പരാതി ഉചിതമായ ടീമിനെ ഏൽപ്പിച്ചിരിക്കുന്നു.",
            Status.IN_PROGRESS: "പരാതി നിലവിൽ പ്രോസസ്സ് ചെയ്യുന്നു.",
            Status.RESOLVED: "നിയുക്ത ടീം പരാതി പരിഹരിച്ചു.",
            Status.CLOSED: "പരാതി അടച്ച് പൂർത്തിയാക്കി.",
            Status.REOPENED: "അധിക ജോലിക്കായി പരാതി വീണ്ടും തുറന്നു.",
        },
    },
}

# ── Subject lines: role → locale ─────────────────────────────────────────
SUBJECT_TEMPLATES: Dict[Role, Dict[str, str]] = {
    Role.CITIZEN: {
        "en": "Complaint {complaintId} - Status Updated to {status} - {appName}",
        "hi": "शिकायत {complaintId} - स्थिति {status} में अपडेट की गई - {appName}",
        "ml": "പരാതി {complaintId} - സ്റ്റാറ്റസ് {status} ലേക്ക് അപ്ഡേറ്റ് ചെയ്തു - {appName}",
    },
    Role.WARD_OFFICER: {
        "en": "[Ward] Complaint {complaintId} - {status} - {appName}",
        "hi": "[वार्ड] शिकायत {complaintId} - {status} - {appName}",
        "ml": "[വാർഡ്] പരാതി {complaintId} - {status} - {appName}",
    },
    Role.MAINTENANCE_TEAM: {
        "en": "[Maintenance] Complaint {complaintId} - {status} - {appName}",
        "hi": "[रखरखाव] शिकायत {complaintId} - {status} - {appName}",
        "ml": "[മെയിന്റനൻസ്] പരാതി {complaintId} - {status} - {appName}",
    },
    Role.ADMINISTRATOR: {
        "en": "[Admin] Complaint {complaintId} - {status} - {appName}",
        "hi": "[व्यवस्थापक] शिकायत {complaintId} - {status} - {appName}",
        "ml": "[അഡ്മിൻ] പരാതി {complaintId} - {status} - {appName}",
    },
}

DEFAULT_SUBJECT = "Complaint {complaintId} - Status Updated to {status} - {appName}"
GENERIC_STATUS_MESSAGE = "Complaint status has been updated to {status}."

# ── Styling ───────────────────────────────────────────────────────────────
STATUS_COLORS: Dict[Status, str] = {
    Status.REGISTERED: "#3182ce",
    Status.ASSIGNED: "#ed8936",
    Status.IN_PROGRESS: "#dd6b20",
    Status.RESOLVED: "#38a169",
    Status.CLOSED: "#718096",
    Status.REOPENED: "#e53e3e",
}

PRIORITY_COLORS: Dict[Priority, str] = {
    Priority.LOW: "#38a169",
    Priority.MEDIUM: "#ed8936",
    Priority.HIGH: "#dd6b20",
    Priority.CRITICAL: "#e53e3e",
}

# ── Content limits ────────────────────────────────────────────────────────
MAX_SUBJECT_LENGTH = 150
MAX_TEXT_LENGTH = 10_000
MAX_HTML_LENGTH = 50_000
MAX_COMMENT_LENGTH = 4_000
MAX_LOG_COMMENT_LENGTH = 300
MAX_LISTED_ATTACHMENTS = 10
TRUNCATION_MARKER = "... [truncated]"


class TemplateRegistry:
    """Read-only lookup over templates and message tables."""

    def __init__(
        self,
        templates: Optional[Mapping[Role, NotificationTemplate]] = None,
        status_messages: Optional[Mapping[TemplateKind, Mapping[str, Mapping[Status, str]]]] = None,
        subjects: Optional[Mapping[Role, Mapping[str, str]]] = None,
        default_locale: str = "en",
    ) -> None:
        self._templates = MappingProxyType(dict(templates or EMAIL_TEMPLATES))
        self._messages = MappingProxyType(dict(status_messages or STATUS_MESSAGES))
        self._subjects = MappingProxyType(dict(subjects or SUBJECT_TEMPLATES))
        self.default_locale = default_locale

    def template_for(self, role: Role) -> Optional[NotificationTemplate]:
        return self._templates.get(role)

    @property
    def roles(self) -> list[Role]:
        return list(self._templates)

    def status_message(self, kind: TemplateKind, locale: str, status: Status) -> str:
        """Message for *status*: recipient locale, then default locale, then generic."""
        by_locale = self._messages.get(kind, {})
        for candidate in (locale, self.default_locale):
            message = by_locale.get(candidate, {}).get(status)
            if message:
                return message
        return GENERIC_STATUS_MESSAGE.format(status=status.value)

    def subject_template(self, role: Role, locale: str) -> str:
        by_locale = self._subjects.get(role, {})
        return by_locale.get(locale) or by_locale.get(self.default_locale) or DEFAULT_SUBJECT


def status_color(status: Status) -> str:
    return STATUS_COLORS.get(status, STATUS_COLORS[Status.REGISTERED])


def priority_color(priority: Optional[Priority]) -> str:
    return PRIORITY_COLORS.get(priority, PRIORITY_COLORS[Priority.MEDIUM])
