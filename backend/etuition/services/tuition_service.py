"""Tuition Service — postings, visibility-scoped reads, and admin moderation.

Invariants:
    - studentEmail on a new posting is the caller's verified email, never the body's
    - New postings start as pending
    - Hidden (pending/rejected) postings read as 404 to anyone but owner and admins
    - Edits and deletes are owner-or-admin
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from etuition.core.access_policy import (
    can_view_tuition, require_role, tuition_listing_statuses,
)
from etuition.core.domain_types import Identity, Role, TuitionStatus
from etuition.core.errors import ForbiddenError, ResourceNotFoundError
from etuition.core.status_transitions import (
    check_tuition_transition, parse_tuition_status,
)
from etuition.models.tuition import Tuition
from etuition.schemas.tuition import TuitionCreate, TuitionUpdate
from etuition.services.user_service import is_admin, require_admin_identity, role_for_email

logger = logging.getLogger(__name__)


async def list_tuitions(
    db: AsyncSession, student_email: str | None, viewer: Identity | None,
) -> list[Tuition]:
    """Public listing. Unfiltered or non-owner listings only show approved postings."""
    statuses = tuition_listing_statuses(
        student_email, viewer, await is_admin(db, viewer),
    )
    query = select(Tuition).order_by(Tuition.posted_date.desc())
    if student_email is not None:
        query = query.where(Tuition.student_email == student_email)
    if statuses is not None:
        query = query.where(Tuition.status.in_([s.value for s in statuses]))
    result = await db.execute(query)
    return list(result.scalars().all())


async def list_for_moderation(
    db: AsyncSession, identity: Identity, status_filter: str | None,
) -> list[Tuition]:
    await require_admin_identity(db, identity)
    query = select(Tuition).order_by(Tuition.posted_date.desc())
    if status_filter:
        query = query.where(
            Tuition.status == parse_tuition_status(status_filter).value,
        )
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_tuition_or_404(db: AsyncSession, tuition_id: UUID) -> Tuition:
    tuition = await db.get(Tuition, tuition_id)
    if not tuition:
        raise ResourceNotFoundError("Tuition", str(tuition_id))
    return tuition


async def get_visible_tuition(
    db: AsyncSession, tuition_id: UUID, viewer: Identity | None,
) -> Tuition:
    tuition = await get_tuition_or_404(db, tuition_id)
    if not can_view_tuition(
        tuition.status, tuition.student_email, viewer, await is_admin(db, viewer),
    ):
        raise ResourceNotFoundError("Tuition", str(tuition_id))
    return tuition


async def create_tuition(
    db: AsyncSession, body: TuitionCreate, identity: Identity,
) -> Tuition:
    require_role(await role_for_email(db, identity.email), Role.STUDENT)
    tuition = Tuition(
        **body.model_dump(by_alias=False),
        student_email=identity.email,
        status=TuitionStatus.PENDING.value,
    )
    db.add(tuition)
    await db.commit()
    await db.refresh(tuition)
    logger.info(
        f"Tuition {tuition.id} posted", extra={"user_email": identity.email},
    )
    return tuition


async def _get_owned_tuition(
    db: AsyncSession, tuition_id: UUID, identity: Identity,
) -> Tuition:
    tuition = await get_tuition_or_404(db, tuition_id)
    if tuition.student_email != identity.email and not await is_admin(db, identity):
        raise ForbiddenError()
    return tuition


async def update_tuition(
    db: AsyncSession, tuition_id: UUID, body: TuitionUpdate, identity: Identity,
) -> Tuition:
    tuition = await _get_owned_tuition(db, tuition_id, identity)
    for key, value in body.model_dump(exclude_unset=True, by_alias=False).items():
        setattr(tuition, key, value)
    await db.commit()
    await db.refresh(tuition)
    return tuition


async def delete_tuition(
    db: AsyncSession, tuition_id: UUID, identity: Identity,
) -> int:
    tuition = await _get_owned_tuition(db, tuition_id, identity)
    await db.delete(tuition)
    await db.commit()
    logger.info(f"Tuition {tuition_id} deleted", extra={"user_email": identity.email})
    return 1


async def set_tuition_status(
    db: AsyncSession, tuition_id: UUID, requested: str, identity: Identity,
) -> Tuition:
    await require_admin_identity(db, identity)
    tuition = await get_tuition_or_404(db, tuition_id)
    target = check_tuition_transition(tuition.status, requested)
    tuition.status = target.value
    await db.commit()
    await db.refresh(tuition)
    logger.info(
        f"Tuition {tuition_id} moderated: {target.value}",
        extra={"user_email": identity.email},
    )
    return tuition
