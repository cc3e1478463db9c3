# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: Transition checks, broadcasts, recipient listing and previews."""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from complaint_broadcast.core.dependencies import get_broadcast_service, get_event_hooks
from complaint_broadcast.models.domain import BroadcastEvent, BroadcastResult, Role, Status
from complaint_broadcast.schemas import (
    BroadcastRequest, NextStatuses, PreviewRequest, PreviewResponse,
    RecipientList, RecipientOut, TransitionCheck, TransitionVerdict,
)
from complaint_broadcast.services.broadcast_service import BroadcastService
from complaint_broadcast.services.hooks import ComplaintEventHooks
from complaint_broadcast.services.transitions import allowed_next_statuses, validate_transition

router = APIRouter(prefix="/api/v1", tags=["Broadcasts"])


# ── Transitions ──

@router.post("/transitions/validate", response_model=TransitionVerdict)
async def check_transition(payload: TransitionCheck):
    # Raises InvalidTransition / Unauthorized, mapped to 409 / 403 in main.
    validate_transition(payload.current_status, payload.requested_status, payload.actor_role)
    return TransitionVerdict(allowed=True, **payload.model_dump())


@router.get("/transitions/{status}/next", response_model=NextStatuses)
async def next_statuses(status: Status, role: Role = Query(...)):
    return NextStatuses(
        current_status=status, actor_role=role,
        next_statuses=allowed_next_statuses(status, role),
    )


# ── Broadcasts ──

@router.post("/broadcasts", response_model=BroadcastResult)
async def broadcast(payload: BroadcastRequest,
                    service: BroadcastService = Depends(get_broadcast_service),
                    hooks: ComplaintEventHooks = Depends(get_event_hooks)):
    event = BroadcastEvent(**payload.model_dump(exclude={"background"}))
    if payload.background:
        hooks.fire_and_forget(
            hooks.on_status_updated(
                event.complaint_id, event.new_status, event.previous_status,
                event.comment, event.acting_user_id, event.additional_data,
            ),
            name="status_updated",
        )
        return JSONResponse(
            status_code=202,
            content={"accepted": True, "complaint_id": event.complaint_id},
        )
    return await service.broadcast(event)


@router.get("/complaints/{complaint_id}/recipients", response_model=RecipientList)
async def list_recipients(complaint_id: str, status: Status = Query(...),
                          service: BroadcastService = Depends(get_broadcast_service)):
    recipients = service.recipients_for(complaint_id, status)
    return RecipientList(
        complaint_id=complaint_id, status=status, total=len(recipients),
        recipients=[
            RecipientOut(id=r.id, email=r.email, full_name=r.full_name,
                         role=r.role, language=r.language)
            for r in recipients
        ],
    )


@router.post("/complaints/{complaint_id}/preview", response_model=PreviewResponse)
async def preview(complaint_id: str, payload: PreviewRequest,
                  service: BroadcastService = Depends(get_broadcast_service)):
    event = BroadcastEvent(complaint_id=complaint_id, **payload.model_dump())
    previews = service.preview(complaint_id, event)
    return PreviewResponse(complaint_id=complaint_id, total=len(previews), previews=previews)
