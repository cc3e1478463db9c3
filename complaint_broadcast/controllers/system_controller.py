# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Ops endpoints: liveness, store readiness and Prometheus scrape."""
from fastapi import APIRouter
from fastapi.responses import JSONResponse, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from complaint_broadcast.core.config import settings
from complaint_broadcast.core.dependencies import get_complaint_store, get_event_hooks

router = APIRouter(tags=["System"])


@router.get("/health")
async def health_check():
    return {"status": "ok", "service": settings.SERVICE_NAME}


@router.get("/health/ready")
async def readiness_check():
    try:
        count = get_complaint_store().verify_connection()
        return {
            "status": "ok",
            "service": settings.SERVICE_NAME,
            "complaints_in_store": count,
            "pending_broadcasts": get_event_hooks().pending,
        }
    except Exception as exc:
        return JSONResponse(
            status_code=503,
            content={"status": "degraded", "service": settings.SERVICE_NAME, "detail": str(exc)},
        )


@router.get("/metrics")
async def prometheus_metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
