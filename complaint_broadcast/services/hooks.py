# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Event hooks: the entry points the complaint CRUD layer calls after it has
committed a change.

Every hook builds a ``BroadcastEvent``, awaits the broadcaster and swallows
any error after logging it: a notification problem must never fail the
request that changed the complaint. Callers that do not want to wait use
``fire_and_forget``.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

from complaint_broadcast.core.logging import get_logger
from complaint_broadcast.metrics import HOOK_FAILURES
from complaint_broadcast.models.domain import (
    BroadcastEvent,
    BroadcastResult,
    ComplaintSnapshot,
    Status,
)
from complaint_broadcast.services.broadcast_service import BroadcastService

logger = get_logger(__name__)


def _file_refs(files: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    return [
        {"id": f.get("id"), "file_name": f.get("file_name"), "original_name": f.get("original_name")}
        for f in files or []
    ]


class ComplaintEventHooks:
    def __init__(self, broadcaster: BroadcastService) -> None:
        self._broadcaster = broadcaster
        self._background: Set[asyncio.Task] = set()

    async def _run(self, hook: str, complaint_id: str,
                   call: Callable[[], Awaitable[BroadcastResult]]) -> Optional[BroadcastResult]:
        try:
            result = await call()
        except Exception as exc:
            HOOK_FAILURES.labels(hook=hook).inc()
            logger.error(
                "Notification hook %s failed for complaint %s: %s", hook, complaint_id, exc,
                exc_info=True, extra={"hook": hook, "complaint_id": complaint_id},
            )
            return None
        if not result.success:
            HOOK_FAILURES.labels(hook=hook).inc()
            logger.warning(
                "Notification hook %s finished without broadcasting: %s", hook, result.error,
                extra={"hook": hook, "complaint_id": complaint_id},
            )
        return result

    def _broadcast(self, hook: str, **fields: Any) -> Awaitable[Optional[BroadcastResult]]:
        complaint_id = fields.get("complaint_id")
        logger.info(
            "Triggering %s broadcast for complaint %s", hook, complaint_id,
            extra={"hook": hook, "complaint_id": complaint_id},
        )
        # Event validation errors surface inside _run.
        return self._run(hook, complaint_id, lambda: self._broadcaster.broadcast(BroadcastEvent(**fields)))

    # ── Hooks ──

    async def on_complaint_created(self, complaint: ComplaintSnapshot,
                                   created_by_id: Optional[str] = None) -> Optional[BroadcastResult]:
        return await self._run(
            "created", getattr(complaint, "id", None),
            lambda: self._announce_created(complaint, created_by_id),
        )

    async def _announce_created(self, complaint: ComplaintSnapshot,
                                created_by_id: Optional[str]) -> BroadcastResult:
        logger.info(
            "Triggering creation broadcast for complaint %s (%s)",
            complaint.id, complaint.display_id, extra={"complaint_id": complaint.id},
        )
        return await self._broadcaster.broadcast_complaint_created(complaint.id, created_by_id)

    async def on_status_updated(self, complaint_id: str, new_status: Status,
                                previous_status: Optional[Status] = None,
                                comment: Optional[str] = None,
                                actor_id: Optional[str] = None,
                                additional_data: Optional[Dict[str, Any]] = None) -> Optional[BroadcastResult]:
        return await self._broadcast(
            "status_updated",
            complaint_id=complaint_id, new_status=new_status,
            previous_status=previous_status, comment=comment,
            acting_user_id=actor_id, additional_data=additional_data or {},
        )

    async def on_assigned(self, complaint_id: str, assigned_to_id: str,
                          assigned_by_id: Optional[str] = None,
                          assignment_type: str = "maintenance_team",
                          comment: Optional[str] = None) -> Optional[BroadcastResult]:
        logger.info(
            "Triggering assignment broadcast for complaint %s (%s)", complaint_id, assignment_type,
            extra={"hook": "assigned", "complaint_id": complaint_id},
        )
        return await self._run(
            "assigned", complaint_id,
            lambda: self._broadcaster.broadcast_assignment(
                complaint_id, assigned_to_id, assigned_by_id, assignment_type, comment,
            ),
        )

    async def on_maintenance_work_logged(self, complaint_id: str, work_note: str,
                                         actor_id: Optional[str] = None,
                                         attachments: Optional[List[Dict[str, Any]]] = None) -> Optional[BroadcastResult]:
        return await self._broadcast(
            "maintenance_work_logged",
            complaint_id=complaint_id, new_status=Status.IN_PROGRESS,
            comment=work_note, acting_user_id=actor_id,
            additional_data={
                "is_maintenance_update": True,
                "attachments": _file_refs(attachments),
            },
        )

    async def on_resolved(self, complaint_id: str, resolution_note: Optional[str] = None,
                          actor_id: Optional[str] = None,
                          previous_status: Optional[Status] = None,
                          resolution_photos: Optional[List[Dict[str, Any]]] = None) -> Optional[BroadcastResult]:
        return await self._broadcast(
            "resolved",
            complaint_id=complaint_id, new_status=Status.RESOLVED,
            previous_status=previous_status, comment=resolution_note,
            acting_user_id=actor_id,
            additional_data={
                "is_resolution": True,
                "resolution_photos": _file_refs(resolution_photos),
            },
        )

    async def on_closed(self, complaint_id: str, closure_note: Optional[str] = None,
                        actor_id: Optional[str] = None,
                        citizen_feedback: Optional[Dict[str, Any]] = None) -> Optional[BroadcastResult]:
        return await self._broadcast(
            "closed",
            complaint_id=complaint_id, new_status=Status.CLOSED,
            previous_status=Status.RESOLVED, comment=closure_note,
            acting_user_id=actor_id,
            additional_data={"is_closure": True, "citizen_feedback": citizen_feedback},
        )

    async def on_reopened(self, complaint_id: str, reopen_reason: Optional[str] = None,
                          actor_id: Optional[str] = None) -> Optional[BroadcastResult]:
        return await self._broadcast(
            "reopened",
            complaint_id=complaint_id, new_status=Status.REOPENED,
            previous_status=Status.CLOSED, comment=reopen_reason,
            acting_user_id=actor_id, additional_data={"is_reopening": True},
        )

    # ── Scheduling ──

    def fire_and_forget(self, coro: Awaitable[Any], name: str = "broadcast") -> asyncio.Task:
        """Run *coro* in the background; the caller never awaits it."""
        task = asyncio.ensure_future(coro)
        self._background.add(task)
        task.add_done_callback(lambda t: self._reap(t, name))
        return task

    def _reap(self, task: asyncio.Task, name: str) -> None:
        self._background.discard(task)
        if task.cancelled():
            logger.warning("Background %s task was cancelled", name, extra={"hook": name})
            return
        exc = task.exception()
        if exc is not None:
            HOOK_FAILURES.labels(hook=name).inc()
            logger.error("Background %s task failed: %s", name, exc, extra={"hook": name})

    @property
    def pending(self) -> int:
        return len(self._background)

    async def drain(self) -> None:
        """Wait for every background broadcast still running (used on shutdown)."""
        if self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)


async def safely_trigger_hook(hook: Callable[..., Awaitable[Any]], params: Dict[str, Any],
                              hook_name: str) -> None:
    """Call *hook* with *params*, logging instead of raising on failure."""
    try:
        await hook(**params)
    except Exception as exc:
        HOOK_FAILURES.labels(hook=hook_name).inc()
        logger.error(
            "Notification hook failed: %s: %s", hook_name, exc,
            exc_info=True, extra={"hook": hook_name},
        )
