# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain exception hierarchy.

Validator errors (``InvalidTransition``, ``Unauthorized``) reject a request
before anything is persisted or broadcast. Render and transport errors are
per recipient and only ever counted as failures inside a broadcast.
"""

from __future__ import annotations


class BroadcastError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str = "Complaint broadcast error.") -> None:
        self.message = message
        super().__init__(self.message)


class ComplaintNotFound(BroadcastError):
    def __init__(self, complaint_id: str) -> None:
        self.complaint_id = complaint_id
        super().__init__(f"Complaint not found: {complaint_id}")


class InvalidTransition(BroadcastError):
    """The requested status is not reachable from the current one."""

    def __init__(self, current_status: str, requested_status: str) -> None:
        self.current_status = current_status
        self.requested_status = requested_status
        super().__init__(
            f"Cannot transition from '{current_status}' to '{requested_status}'."
        )


class Unauthorized(BroadcastError):
    """The transition is legal but the acting role may not perform it."""

    def __init__(self, current_status: str, requested_status: str, actor_role: str) -> None:
        self.current_status = current_status
        self.requested_status = requested_status
        self.actor_role = actor_role
        super().__init__(
            f"Role '{actor_role}' may not transition a complaint from "
            f"'{current_status}' to '{requested_status}'."
        )


class RecipientRenderError(BroadcastError):
    def __init__(self, recipient: str, reason: str) -> None:
        self.recipient = recipient
        self.reason = reason
        super().__init__(f"Failed to render notification for {recipient}: {reason}")


class TransportError(BroadcastError):
    def __init__(self, recipient: str, reason: str) -> None:
        self.recipient = recipient
        self.reason = reason
        super().__init__(f"Failed to deliver notification to {recipient}: {reason}")
