"""Tuition Routes — public listing, owner CRUD, and admin moderation."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from etuition.api.deps import get_identity, get_optional_identity
from etuition.core.domain_types import Identity
from etuition.infrastructure.database import get_db
from etuition.schemas.tuition import (
    StatusUpdate, TuitionCreate, TuitionResponse, TuitionUpdate,
)
from etuition.services import tuition_service

router = APIRouter(tags=["tuitions"])


@router.get("/tuitions")
async def list_tuitions(
    student_email: str | None = Query(None, alias="studentEmail"),
    db: AsyncSession = Depends(get_db),
    viewer: Identity | None = Depends(get_optional_identity),
):
    tuitions = await tuition_service.list_tuitions(db, student_email, viewer)
    return [TuitionResponse.model_validate(t).to_wire() for t in tuitions]


@router.get("/admin/tuitions")
async def moderation_queue(
    status_filter: str | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    tuitions = await tuition_service.list_for_moderation(db, identity, status_filter)
    return [TuitionResponse.model_validate(t).to_wire() for t in tuitions]


@router.get("/tuition/{tuition_id}")
async def get_tuition(
    tuition_id: UUID,
    db: AsyncSession = Depends(get_db),
    viewer: Identity | None = Depends(get_optional_identity),
):
    tuition = await tuition_service.get_visible_tuition(db, tuition_id, viewer)
    return TuitionResponse.model_validate(tuition).to_wire()


@router.post("/tuitions", status_code=status.HTTP_201_CREATED)
async def create_tuition(
    body: TuitionCreate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    tuition = await tuition_service.create_tuition(db, body, identity)
    return TuitionResponse.model_validate(tuition).to_wire()


@router.patch("/tuitions/status/{tuition_id}")
async def moderate_tuition(
    tuition_id: UUID,
    body: StatusUpdate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    tuition = await tuition_service.set_tuition_status(
        db, tuition_id, body.status, identity,
    )
    return TuitionResponse.model_validate(tuition).to_wire()


@router.patch("/tuitions/{tuition_id}")
async def update_tuition(
    tuition_id: UUID,
    body: TuitionUpdate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    tuition = await tuition_service.update_tuition(db, tuition_id, body, identity)
    return TuitionResponse.model_validate(tuition).to_wire()


@router.delete("/tuitions/{tuition_id}")
async def delete_tuition(
    tuition_id: UUID,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    deleted = await tuition_service.delete_tuition(db, tuition_id, identity)
    return {"deletedCount": deleted}
