# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Broadcast coordination.

One ``broadcast`` call fetches a complaint snapshot, resolves recipients,
then renders and delivers to every recipient concurrently, waiting for all
sends to settle. Individual failures are counted and logged, never raised;
retries belong to the transport or a calling job queue.
"""

import asyncio
from typing import Any, Dict, List, Optional

from complaint_broadcast.core.config import settings
from complaint_broadcast.core.exceptions import ComplaintNotFound, TransportError
from complaint_broadcast.core.logging import get_logger
from complaint_broadcast.metrics import BROADCAST_DURATION, BROADCASTS_TOTAL, EMAILS_TOTAL
from complaint_broadcast.models.domain import (
    BroadcastEvent,
    BroadcastResult,
    ComplaintSnapshot,
    OutboundMessage,
    Recipient,
    RecipientSummary,
    Status,
)
from complaint_broadcast.repositories.complaint_repository import ComplaintStore
from complaint_broadcast.services.mail_transport import MailTransport
from complaint_broadcast.services.recipient_resolver import RecipientResolver
from complaint_broadcast.services.renderer import TemplateRenderer

logger = get_logger(__name__)


class BroadcastService:
    """Resolver → renderer → transport, per recipient, all attempted."""

    def __init__(
        self,
        store: ComplaintStore,
        resolver: RecipientResolver,
        renderer: TemplateRenderer,
        transport: MailTransport,
        send_timeout: float = settings.EMAIL_SEND_TIMEOUT,
        enabled: bool = settings.EMAIL_BROADCAST_ENABLED,
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._renderer = renderer
        self._transport = transport
        self._send_timeout = send_timeout
        self._enabled = enabled

    async def broadcast(self, event: BroadcastEvent) -> BroadcastResult:
        status = event.new_status.value
        if not self._enabled:
            BROADCASTS_TOTAL.labels(status=status, outcome="skipped").inc()
            logger.info("Broadcasting disabled; skipping complaint %s", event.complaint_id)
            return BroadcastResult(skipped=True)

        logger.info(
            "Starting complaint status broadcast complaint=%s status=%s previous=%s",
            event.complaint_id, status,
            event.previous_status.value if event.previous_status else None,
            extra={"complaint_id": event.complaint_id, "new_status": status},
        )
        with BROADCAST_DURATION.time():
            try:
                complaint = self._load(event.complaint_id)
            except ComplaintNotFound as exc:
                BROADCASTS_TOTAL.labels(status=status, outcome="not_found").inc()
                logger.error("Broadcast aborted: %s", exc, extra={"complaint_id": event.complaint_id})
                return BroadcastResult(success=False, error=exc.message)

            recipients = self._resolver.resolve(complaint, event.new_status)
            if not recipients:
                BROADCASTS_TOTAL.labels(status=status, outcome="no_recipients").inc()
                logger.info(
                    "No recipients for complaint %s status %s", event.complaint_id, status,
                    extra={"complaint_id": event.complaint_id},
                )
                return BroadcastResult()

            outcomes = await asyncio.gather(
                *(self._deliver(complaint, recipient, event) for recipient in recipients),
                return_exceptions=True,
            )

        sent = 0
        for recipient, outcome in zip(recipients, outcomes):
            if isinstance(outcome, BaseException):
                EMAILS_TOTAL.labels(role=recipient.role.value, outcome="failed").inc()
                logger.error(
                    "Failed to send status update to %s: %s", recipient.email, outcome,
                    extra={
                        "complaint_id": event.complaint_id,
                        "recipient": recipient.email,
                        "role": recipient.role.value,
                    },
                )
            else:
                sent += 1
                EMAILS_TOTAL.labels(role=recipient.role.value, outcome="sent").inc()

        failed = len(recipients) - sent
        BROADCASTS_TOTAL.labels(
            status=status, outcome="complete" if failed == 0 else "partial",
        ).inc()
        logger.info(
            "Broadcast completed complaint=%s status=%s total=%d sent=%d failed=%d",
            event.complaint_id, status, len(recipients), sent, failed,
            extra={"complaint_id": event.complaint_id, "new_status": status},
        )
        return BroadcastResult(
            emails_sent=sent,
            total_recipients=len(recipients),
            failed=failed,
            recipients=[RecipientSummary(email=r.email, role=r.role) for r in recipients],
        )

    # ── Convenience events ──

    async def broadcast_complaint_created(self, complaint_id: str,
                                          created_by_id: Optional[str] = None) -> BroadcastResult:
        return await self.broadcast(BroadcastEvent(
            complaint_id=complaint_id,
            new_status=Status.REGISTERED,
            comment="New complaint registered in the system",
            acting_user_id=created_by_id,
            additional_data={"is_new_complaint": True},
        ))

    async def broadcast_assignment(self, complaint_id: str, assigned_to_id: str,
                                   assigned_by_id: Optional[str], assignment_type: str,
                                   comment: Optional[str] = None) -> BroadcastResult:
        return await self.broadcast(BroadcastEvent(
            complaint_id=complaint_id,
            new_status=Status.ASSIGNED,
            comment=comment or f"Complaint assigned to {assignment_type.replace('_', ' ')}",
            acting_user_id=assigned_by_id,
            additional_data={
                "assignment_type": assignment_type,
                "assigned_to_id": assigned_to_id,
            },
        ))

    # ── Internals ──

    def _load(self, complaint_id: str) -> ComplaintSnapshot:
        complaint = self._store.fetch_complaint_with_relations(complaint_id)
        if complaint is None:
            raise ComplaintNotFound(complaint_id)
        return complaint

    async def _deliver(self, complaint: ComplaintSnapshot, recipient: Recipient,
                       event: BroadcastEvent) -> Dict[str, Any]:
        content = self._renderer.render(recipient, event, complaint)
        message = OutboundMessage(
            to=recipient.email, subject=content.subject,
            text=content.text, html=content.html,
        )
        try:
            result = await asyncio.wait_for(self._transport.send(message), self._send_timeout)
        except asyncio.TimeoutError as exc:
            raise TransportError(recipient.email, f"send timed out after {self._send_timeout}s") from exc
        logger.info(
            "Status update sent to %s", recipient.email,
            extra={
                "complaint_id": complaint.id,
                "recipient": recipient.email,
                "role": recipient.role.value,
                "message_id": (result or {}).get("message_id"),
            },
        )
        return result or {}

    def preview(self, complaint_id: str, event: BroadcastEvent) -> List[Dict[str, Any]]:
        """Render every recipient's message for *event* without sending anything."""
        complaint = self._load(complaint_id)
        previews = []
        for recipient in self._resolver.resolve(complaint, event.new_status):
            content = self._renderer.render(recipient, event, complaint)
            previews.append({
                "email": recipient.email,
                "role": recipient.role,
                "language": recipient.language,
                **content.model_dump(),
            })
        return previews

    def recipients_for(self, complaint_id: str, status: Status) -> List[Recipient]:
        return self._resolver.resolve(self._load(complaint_id), status)
