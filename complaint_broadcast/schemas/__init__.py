# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Pydantic request/response schemas."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from complaint_broadcast.models.domain import Role, Status


class TransitionCheck(BaseModel):
    current_status: Status
    requested_status: Status
    actor_role: Role


class TransitionVerdict(BaseModel):
    allowed: bool
    current_status: Status
    requested_status: Status
    actor_role: Role


class NextStatuses(BaseModel):
    current_status: Status
    actor_role: Role
    next_statuses: List[Status]


class BroadcastRequest(BaseModel):
    complaint_id: str = Field(..., min_length=1, max_length=255)
    new_status: Status
    previous_status: Optional[Status] = None
    comment: Optional[str] = Field(default=None, max_length=5000)
    acting_user_id: Optional[str] = None
    additional_data: Dict[str, Any] = Field(default_factory=dict)
    background: bool = False


class RecipientOut(BaseModel):
    id: str
    email: str
    full_name: str
    role: Role
    language: str


class RecipientList(BaseModel):
    complaint_id: str
    status: Status
    total: int
    recipients: List[RecipientOut]


class PreviewRequest(BaseModel):
    new_status: Status
    previous_status: Optional[Status] = None
    comment: Optional[str] = Field(default=None, max_length=5000)


class PreviewItem(BaseModel):
    email: str
    role: Role
    language: str
    subject: str
    text: str
    html: str


class PreviewResponse(BaseModel):
    complaint_id: str
    total: int
    previews: List[PreviewItem]


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
    request_id: Optional[str] = None
