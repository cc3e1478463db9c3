# type: ignore
# pyright: reportGeneralTypeIssues=false
# pyright: reportOptionalMemberAccess=false
"""
Complaint Broadcast Service
===========================
Validates complaint status transitions and fans out localized status-update
emails to every stakeholder of a complaint (citizen, ward officer,
maintenance team, administrators) whenever the CRUD layer commits a change.

Lifecycle:
    REGISTERED ─► ASSIGNED ─► IN_PROGRESS ─► RESOLVED ─► CLOSED ─► REOPENED
    ASSIGNED ─► RESOLVED  (fast-track)
    REOPENED ─► ASSIGNED | IN_PROGRESS

Port: 8005
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from complaint_broadcast.controllers.broadcast_controller import router as broadcast_router
from complaint_broadcast.controllers.system_controller import router as system_router
from complaint_broadcast.core.config import settings
from complaint_broadcast.core.database import engine
from complaint_broadcast.core.dependencies import get_event_hooks
from complaint_broadcast.core.exceptions import (
    BroadcastError,
    ComplaintNotFound,
    InvalidTransition,
    Unauthorized,
)
from complaint_broadcast.core.logging import get_logger
from complaint_broadcast.middleware import MetricsMiddleware, RequestIDMiddleware
from complaint_broadcast.schemas import ErrorResponse

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    logger.info(
        "Complaint broadcast service starting (broadcast_enabled=%s, transport=%s, store=%s)",
        settings.EMAIL_BROADCAST_ENABLED, settings.EMAIL_TRANSPORT,
        "sql" if engine is not None else "memory",
    )
    yield
    hooks = get_event_hooks()
    logger.info("Shutting down, draining %d background broadcasts", hooks.pending)
    await hooks.drain()
    if engine is not None:
        engine.dispose()


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Complaint Broadcast Service",
    description="Complaint status state machine and multi-recipient email broadcasts.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
    responses={
        422: {"model": ErrorResponse, "description": "Validation error"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)

app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Exception handlers ───────────────────────────────────────────────────
def _error(request: Request, status_code: int, error: str, exc: BroadcastError) -> JSONResponse:
    req_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "detail": exc.message, "request_id": req_id},
    )


@app.exception_handler(InvalidTransition)
async def invalid_transition_handler(request: Request, exc: InvalidTransition):
    return _error(request, 409, "invalid_transition", exc)


@app.exception_handler(Unauthorized)
async def unauthorized_handler(request: Request, exc: Unauthorized):
    return _error(request, 403, "unauthorized", exc)


@app.exception_handler(ComplaintNotFound)
async def not_found_handler(request: Request, exc: ComplaintNotFound):
    return _error(request, 404, "complaint_not_found", exc)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception", extra={"request_id": req_id})
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "detail": str(exc), "request_id": req_id},
    )


# ── Routers ──────────────────────────────────────────────────────────────
app.include_router(system_router)
app.include_router(broadcast_router)


# ── Entrypoint ────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
