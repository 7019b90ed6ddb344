"""Application Service — tutor hiring requests, their status, and contract termination.

Invariants:
    - tutorEmail on a new application is the caller's verified email
    - One application per (tutor, student, subject)
    - Only the two parties may read an application; parties or admins may cancel or reject
    - Termination deletes the row, then writes one notification best-effort;
      a failed notification never restores the application
    - Unknown ids on delete/terminate report deletedCount 0, not 404
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from etuition.core.access_policy import (
    counterpart_email, is_party, require_owner, require_party, require_role,
)
from etuition.core.domain_types import (
    ApplicationStatus, Identity, NotificationType, Role,
)
from etuition.core.errors import (
    DuplicateApplicationError, ForbiddenError, ResourceNotFoundError,
)
from etuition.core.status_transitions import (
    check_application_transition, check_manual_application_update,
)
from etuition.models.application import Application
from etuition.models.notification import Notification
from etuition.schemas.application import ApplicationCreate
from etuition.services.user_service import is_admin, role_for_email

logger = logging.getLogger(__name__)


async def create_application(
    db: AsyncSession, body: ApplicationCreate, identity: Identity,
) -> Application:
    require_role(await role_for_email(db, identity.email), Role.TUTOR)
    existing = await db.execute(
        select(Application.id).where(
            Application.tutor_email == identity.email,
            Application.student_email == body.student_email,
            Application.subject == body.subject,
        ),
    )
    if existing.first() is not None:
        raise DuplicateApplicationError(body.subject)

    application = Application(
        **body.model_dump(by_alias=False),
        tutor_email=identity.email,
        status=ApplicationStatus.PENDING.value,
    )
    db.add(application)
    await db.commit()
    await db.refresh(application)
    logger.info(
        f"Application {application.id} created",
        extra={"user_email": identity.email, "app_id": str(application.id)},
    )
    return application


async def get_application_or_404(
    db: AsyncSession, application_id: UUID,
) -> Application:
    application = await db.get(Application, application_id)
    if not application:
        raise ResourceNotFoundError("Application", str(application_id))
    return application


async def get_application_for_party(
    db: AsyncSession, application_id: UUID, identity: Identity,
) -> Application:
    application = await get_application_or_404(db, application_id)
    require_party(identity, application.tutor_email, application.student_email)
    return application


async def list_for_tutor(
    db: AsyncSession, tutor_email: str, identity: Identity,
) -> list[Application]:
    require_owner(identity, tutor_email)
    result = await db.execute(
        select(Application)
        .where(Application.tutor_email == tutor_email)
        .order_by(Application.applied_date.desc()),
    )
    return list(result.scalars().all())


async def list_for_student(
    db: AsyncSession, student_email: str, identity: Identity,
) -> list[Application]:
    require_owner(identity, student_email)
    result = await db.execute(
        select(Application)
        .where(Application.student_email == student_email)
        .order_by(Application.applied_date.desc()),
    )
    return list(result.scalars().all())


async def _require_party_or_admin(
    db: AsyncSession, application: Application, identity: Identity,
) -> None:
    if is_party(identity, application.tutor_email, application.student_email):
        return
    if not await is_admin(db, identity):
        raise ForbiddenError()


async def update_application_status(
    db: AsyncSession, application_id: UUID, requested: str, identity: Identity,
) -> Application:
    application = await get_application_or_404(db, application_id)
    await _require_party_or_admin(db, application, identity)
    target = check_manual_application_update(application.status, requested)
    application.status = target.value
    await db.commit()
    await db.refresh(application)
    logger.info(
        f"Application {application_id} set to {target.value}",
        extra={"user_email": identity.email, "app_id": str(application_id)},
    )
    return application


async def cancel_application(
    db: AsyncSession, application_id: UUID, identity: Identity,
) -> int:
    application = await db.get(Application, application_id)
    if not application:
        return 0
    await _require_party_or_admin(db, application, identity)
    check_application_transition(application.status, ApplicationStatus.TERMINATED)
    await db.delete(application)
    await db.commit()
    logger.info(
        f"Application {application_id} cancelled",
        extra={"user_email": identity.email, "app_id": str(application_id)},
    )
    return 1


async def terminate_contract(
    db: AsyncSession, application_id: UUID, identity: Identity,
) -> int:
    """Delete the application and tell the other party. Returns deletedCount."""
    application = await db.get(Application, application_id)
    if not application:
        return 0
    require_party(identity, application.tutor_email, application.student_email)
    check_application_transition(application.status, ApplicationStatus.TERMINATED)

    receiver = counterpart_email(
        identity, application.tutor_email, application.student_email,
    )
    subject = application.subject
    await db.delete(application)
    await db.commit()
    logger.info(
        f"Contract {application_id} terminated",
        extra={"user_email": identity.email, "app_id": str(application_id)},
    )

    await _notify_best_effort(db, Notification(
        receiver_email=receiver,
        sender_email=identity.email,
        message=f"Your contract for {subject} was terminated by {identity.email}",
        type=NotificationType.TERMINATION.value,
    ))
    return 1


async def _notify_best_effort(db: AsyncSession, notification: Notification) -> None:
    db.add(notification)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"Notification write failed: {e}",
            extra={"user_email": notification.receiver_email},
        )


async def list_notifications(
    db: AsyncSession, email: str, identity: Identity,
) -> list[Notification]:
    require_owner(identity, email)
    result = await db.execute(
        select(Notification)
        .where(Notification.receiver_email == email)
        .order_by(Notification.date.desc()),
    )
    return list(result.scalars().all())
