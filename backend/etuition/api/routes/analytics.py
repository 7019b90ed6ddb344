"""Analytics Routes — admin aggregates and owner-scoped revenue/expenses."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from etuition.api.deps import get_identity
from etuition.core.domain_types import Identity
from etuition.infrastructure.database import get_db
from etuition.services import stats_service

router = APIRouter(tags=["analytics"])


@router.get("/admin-stats")
async def admin_stats(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    return await stats_service.admin_stats(db, identity)


@router.get("/admin/analytics")
async def admin_analytics(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    return await stats_service.analytics(db, identity)


@router.get("/tutor-revenue/{email}")
async def tutor_revenue(
    email: str,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    return await stats_service.tutor_revenue(db, email, identity)


@router.get("/student-expenses/{email}")
async def student_expenses(
    email: str,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    return await stats_service.student_expenses(db, email, identity)
