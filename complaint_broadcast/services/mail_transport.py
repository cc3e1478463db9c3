# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Mail transports: the delivery side of a broadcast.

A transport takes one fully rendered ``OutboundMessage`` and returns
``{"message_id": ...}``; any exception is treated by the broadcaster as a
failure for that one recipient.
"""

import uuid
from typing import Any, Dict, List, Protocol

import httpx

from complaint_broadcast.core.config import settings
from complaint_broadcast.core.exceptions import TransportError
from complaint_broadcast.core.logging import get_logger
from complaint_broadcast.models.domain import OutboundMessage

logger = get_logger(__name__)


class MailTransport(Protocol):
    async def send(self, message: OutboundMessage) -> Dict[str, Any]:
        ...


class LogMailTransport:
    """Mock email channel. Logs the message instead of delivering it."""

    async def send(self, message: OutboundMessage) -> Dict[str, Any]:
        message_id = f"<{uuid.uuid4()}@{settings.SERVICE_NAME}>"
        logger.info(
            "[MOCK EMAIL] To: %s | Subject: %s", message.to, message.subject,
            extra={"recipient": message.to, "message_id": message_id},
        )
        return {"message_id": message_id}


class PreviewMailTransport:
    """Collects rendered messages without sending anything."""

    def __init__(self, max_size: int = 1000) -> None:
        self.outbox: List[OutboundMessage] = []
        self._max_size = max_size
        self._count = 0

    async def send(self, message: OutboundMessage) -> Dict[str, Any]:
        self._count += 1
        self.outbox.append(message)
        if len(self.outbox) > self._max_size:
            del self.outbox[: len(self.outbox) - self._max_size]
        return {"message_id": f"preview-{self._count}"}


class HttpMailTransport:
    """Delivers through an HTTP mail relay (JSON POST, bearer token)."""

    def __init__(self, relay_url: str, token: str = "", sender: str = settings.EMAIL_FROM,
                 timeout: float = settings.EMAIL_SEND_TIMEOUT) -> None:
        self._relay_url = relay_url
        self._token = token
        self._sender = sender
        self._timeout = timeout

    async def send(self, message: OutboundMessage) -> Dict[str, Any]:
        headers = {"Authorization": f"Bearer {self._token}"} if self._token else {}
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(self._relay_url, headers=headers, json={
                    "from": self._sender,
                    "to": message.to,
                    "subject": message.subject,
                    "text": message.text,
                    "html": message.html,
                })
        except httpx.HTTPError as exc:
            raise TransportError(message.to, f"relay unreachable: {exc}") from exc

        if resp.status_code >= 300:
            raise TransportError(message.to, f"relay returned {resp.status_code}")
        try:
            message_id = resp.json().get("message_id")
        except ValueError:
            message_id = None
        logger.info(
            "Mail relay accepted message for %s (status=%s)", message.to, resp.status_code,
            extra={"recipient": message.to, "message_id": message_id},
        )
        return {"message_id": message_id or resp.headers.get("X-Message-ID", "")}


def build_transport() -> MailTransport:
    """Pick a transport from settings."""
    if settings.EMAIL_PREVIEW_ONLY:
        return PreviewMailTransport()
    if settings.EMAIL_TRANSPORT == "http":
        if not settings.MAIL_RELAY_URL:
            logger.warning("EMAIL_TRANSPORT=http but MAIL_RELAY_URL is empty; using log transport")
            return LogMailTransport()
        return HttpMailTransport(settings.MAIL_RELAY_URL, settings.MAIL_RELAY_TOKEN)
    return LogMailTransport()
