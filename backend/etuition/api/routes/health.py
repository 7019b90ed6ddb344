"""Health & Readiness Probes — liveness text and database readiness.

Invariants:
    - GET / always returns 200 plain text if the process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable (readiness)
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse, PlainTextResponse

import etuition.infrastructure.database as database

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
async def liveness():
    return "eTuition Server Running"


@router.get("/health/ready")
async def readiness_check():
    """Readiness probe — includes database connectivity."""
    db_manager = database.db_manager
    db_ok = await db_manager.health_check() if db_manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
