"""Stats Service — reads the counts and sums that core/platform_stats turns into dashboards.

Invariants:
    - Read-only: no commits
    - Owner-scoped stats (revenue, expenses, full profile) require identity == target
    - Admin aggregates require a store-derived admin role
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from etuition.config import get_settings
from etuition.core.access_policy import project_profile, require_owner, resolve_role
from etuition.core.domain_types import Identity, Role
from etuition.core.errors import ResourceNotFoundError
from etuition.core.platform_stats import (
    compute_admin_stats, compute_analytics, compute_student_stats,
    compute_tutor_stats, sum_salaries,
)
from etuition.models.application import Application
from etuition.models.payment import Payment
from etuition.models.tuition import Tuition
from etuition.models.user import User
from etuition.schemas.payment import PaymentResponse
from etuition.schemas.user import UserResponse
from etuition.services.user_service import find_user_by_email, require_admin_identity


async def _count(db: AsyncSession, model, *conditions) -> int:
    query = select(func.count()).select_from(model)
    if conditions:
        query = query.where(*conditions)
    return (await db.execute(query)).scalar_one()


async def _salaries(db: AsyncSession, *conditions) -> list[float | None]:
    query = select(Payment.salary)
    if conditions:
        query = query.where(*conditions)
    result = await db.execute(query)
    return list(result.scalars().all())


async def _payments(db: AsyncSession, *conditions) -> list[Payment]:
    result = await db.execute(
        select(Payment).where(*conditions).order_by(Payment.date.desc()),
    )
    return list(result.scalars().all())


async def admin_stats(db: AsyncSession, identity: Identity) -> dict:
    await require_admin_identity(db, identity)
    return await _admin_counts(db)


async def _admin_counts(db: AsyncSession) -> dict:
    return compute_admin_stats(
        await _count(db, User), await _count(db, Tuition), await _salaries(db),
    )


async def analytics(db: AsyncSession, identity: Identity) -> dict:
    await require_admin_identity(db, identity)
    users_by_role = dict((await db.execute(
        select(User.role, func.count()).group_by(User.role),
    )).all())
    tuitions_by_status = dict((await db.execute(
        select(Tuition.status, func.count()).group_by(Tuition.status),
    )).all())
    return compute_analytics(
        await _salaries(db), users_by_role, tuitions_by_status,
        rate=get_settings().platform_commission_rate,
    )


async def tutor_revenue(db: AsyncSession, email: str, identity: Identity) -> dict:
    require_owner(identity, email)
    payments = await _payments(db, Payment.tutor_email == email)
    return {
        "totalEarnings": sum_salaries(p.salary for p in payments),
        "paymentCount": len(payments),
        "payments": [PaymentResponse.model_validate(p).to_wire() for p in payments],
    }


async def student_expenses(db: AsyncSession, email: str, identity: Identity) -> dict:
    require_owner(identity, email)
    payments = await _payments(db, Payment.student_email == email)
    return {
        "totalSpent": sum_salaries(p.salary for p in payments),
        "paymentCount": len(payments),
        "payments": [PaymentResponse.model_validate(p).to_wire() for p in payments],
    }


async def _role_stats(db: AsyncSession, role: Role, email: str) -> dict:
    if role is Role.ADMIN:
        return await _admin_counts(db)
    if role is Role.TUTOR:
        statuses = (await db.execute(
            select(Application.status).where(Application.tutor_email == email),
        )).scalars().all()
        return compute_tutor_stats(
            list(statuses), await _salaries(db, Payment.tutor_email == email),
        )
    return compute_student_stats(
        await _count(db, Tuition, Tuition.student_email == email),
        await _count(db, Payment, Payment.student_email == email),
    )


async def user_profile(
    db: AsyncSession, email: str, viewer: Identity | None,
) -> dict:
    """Public subset for strangers; full document plus role stats for the owner.

    The super-admin may have no stored row; their profile is synthesized.
    """
    super_admin = get_settings().super_admin_email
    user = await find_user_by_email(db, email)
    if user:
        document = UserResponse.model_validate(user).to_wire()
    elif email == super_admin:
        document = {"email": email, "role": Role.ADMIN.value}
    else:
        raise ResourceNotFoundError("User", email)
    is_owner = viewer is not None and viewer.email == email
    profile = project_profile(document, is_owner)
    if is_owner:
        role = resolve_role(email, user.role if user else None, super_admin)
        profile["stats"] = await _role_stats(db, role, email)
    return profile
