"""Application Routes — hiring requests, their status, cancellation, termination.

Invariants:
    - /applications and /hiring-requests are aliases for the same operations
    - Every route here is protected; list routes are owner-scoped
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from etuition.api.deps import get_identity
from etuition.core.domain_types import Identity
from etuition.infrastructure.database import get_db
from etuition.schemas.application import (
    ApplicationCreate, ApplicationResponse, NotificationResponse,
)
from etuition.schemas.tuition import StatusUpdate
from etuition.services import application_service

router = APIRouter(tags=["applications"])


@router.post("/applications", status_code=status.HTTP_201_CREATED)
@router.post("/hiring-requests", status_code=status.HTTP_201_CREATED)
async def create_application(
    body: ApplicationCreate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    application = await application_service.create_application(db, body, identity)
    return ApplicationResponse.model_validate(application).to_wire()


@router.get("/application/{application_id}")
async def get_application(
    application_id: UUID,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    application = await application_service.get_application_for_party(
        db, application_id, identity,
    )
    return ApplicationResponse.model_validate(application).to_wire()


@router.get("/hiring-requests/{email}")
async def tutor_requests(
    email: str,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    applications = await application_service.list_for_tutor(db, email, identity)
    return [ApplicationResponse.model_validate(a).to_wire() for a in applications]


@router.get("/hiring-requests-by-student/{email}")
async def student_requests(
    email: str,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    applications = await application_service.list_for_student(db, email, identity)
    return [ApplicationResponse.model_validate(a).to_wire() for a in applications]


@router.patch("/applications/status/{application_id}")
@router.patch("/hiring-requests/status/{application_id}")
async def update_status(
    application_id: UUID,
    body: StatusUpdate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    application = await application_service.update_application_status(
        db, application_id, body.status, identity,
    )
    return ApplicationResponse.model_validate(application).to_wire()


@router.delete("/applications/{application_id}")
@router.delete("/cancel-tuition/{application_id}")
async def cancel_application(
    application_id: UUID,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    deleted = await application_service.cancel_application(
        db, application_id, identity,
    )
    return {"deletedCount": deleted}


@router.delete("/terminate-contract/{application_id}")
async def terminate_contract(
    application_id: UUID,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    deleted = await application_service.terminate_contract(
        db, application_id, identity,
    )
    return {"deletedCount": deleted}


@router.get("/notifications/{email}")
async def notifications(
    email: str,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    items = await application_service.list_notifications(db, email, identity)
    return [NotificationResponse.model_validate(n).to_wire() for n in items]
