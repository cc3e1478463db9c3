# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models. Plain pydantic data, no FastAPI imports.

Snapshots are read-only views of records owned by other subsystems
(complaints, users, wards); this package never writes them back.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Status(str, Enum):
    REGISTERED = "REGISTERED"
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"
    REOPENED = "REOPENED"


class Priority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class Role(str, Enum):
    CITIZEN = "CITIZEN"
    WARD_OFFICER = "WARD_OFFICER"
    MAINTENANCE_TEAM = "MAINTENANCE_TEAM"
    ADMINISTRATOR = "ADMINISTRATOR"


class TemplateKind(str, Enum):
    CITIZEN = "citizen"
    STAFF = "staff"
    ADMIN = "admin"


# ── Snapshots ────────────────────────────────────────────────────────────
class Person(BaseModel):
    """A user as seen by the notification engine."""
    id: str
    email: Optional[str] = None
    full_name: str = ""
    role: Role
    language: str = "en"
    phone_number: Optional[str] = None
    is_active: bool = True


class Ward(BaseModel):
    id: str
    name: str
    staff: List[Person] = Field(default_factory=list)


class SubZone(BaseModel):
    id: str
    name: str


class StatusLog(BaseModel):
    id: str
    from_status: Optional[Status] = None
    to_status: Status
    comment: Optional[str] = None
    timestamp: datetime
    user: Optional[Person] = None


class ComplaintSnapshot(BaseModel):
    """A complaint with every relation the broadcaster reads."""
    id: str
    complaint_id: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    status: Status = Status.REGISTERED
    priority: Priority = Priority.MEDIUM
    area: Optional[str] = None
    landmark: Optional[str] = None
    address: Optional[str] = None
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    submitted_by: Optional[Person] = None
    ward_officer: Optional[Person] = None
    maintenance_team: Optional[Person] = None
    assigned_to: Optional[Person] = None
    ward: Optional[Ward] = None
    sub_zone: Optional[SubZone] = None
    submitted_on: datetime
    deadline: Optional[datetime] = None
    resolved_on: Optional[datetime] = None
    status_logs: List[StatusLog] = Field(default_factory=list)

    @property
    def display_id(self) -> str:
        """Human-readable code, falling back to the tail of the internal id."""
        return self.complaint_id or f"#{self.id[-6:]}"


# ── Notification configuration ──────────────────────────────────────────
class NotificationTemplate(BaseModel):
    """Per-role notification policy. Immutable once loaded."""
    model_config = ConfigDict(frozen=True)

    allowed_statuses: FrozenSet[Status]
    show_internal_comments: bool = False
    show_assignment_details: bool = False
    show_maintenance_logs: bool = False
    show_citizen_info: bool = False
    template_kind: TemplateKind
    priority: int = Field(..., ge=1, description="Lower number = higher precedence")

    def allows(self, status: Status) -> bool:
        return status in self.allowed_statuses


class Recipient(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    full_name: str = ""
    role: Role
    language: str = "en"
    template: NotificationTemplate


# ── Broadcast in / out ──────────────────────────────────────────────────
class BroadcastEvent(BaseModel):
    """One status transition to announce. Built once, consumed once."""
    complaint_id: str = Field(..., min_length=1)
    new_status: Status
    previous_status: Optional[Status] = None
    comment: Optional[str] = None
    acting_user_id: Optional[str] = None
    additional_data: Dict[str, Any] = Field(default_factory=dict)


class RecipientSummary(BaseModel):
    email: str
    role: Role


class BroadcastResult(BaseModel):
    success: bool = True
    emails_sent: int = 0
    total_recipients: int = 0
    failed: int = 0
    recipients: List[RecipientSummary] = Field(default_factory=list)
    error: Optional[str] = None
    skipped: bool = False


class RenderedMessage(BaseModel):
    subject: str
    text: str
    html: str


class OutboundMessage(BaseModel):
    to: str
    subject: str
    text: str
    html: str
