"""User Routes — registration, role lookup, profiles, and admin user management.

Invariants:
    - POST /users is idempotent per email
    - GET /users/{id} and /user-stats/{email} project to the public subset
      unless the verified caller is the profile owner
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from etuition.api.deps import get_identity, get_optional_identity
from etuition.core.access_policy import project_profile
from etuition.core.domain_types import Identity
from etuition.infrastructure.database import get_db
from etuition.schemas.user import UserCreate, UserResponse, UserUpdate
from etuition.services import stats_service, user_service

router = APIRouter(tags=["users"])


@router.get("/users/role/{email}")
async def get_role(email: str, db: AsyncSession = Depends(get_db)):
    role = await user_service.role_for_email(db, email)
    return {"role": role.value}


@router.post("/users")
async def create_user(body: UserCreate, db: AsyncSession = Depends(get_db)):
    user, created = await user_service.create_user(db, body)
    if not created:
        return {"message": "User exists", "insertedId": None}
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"insertedId": str(user.id)},
    )


@router.get("/users")
async def list_users(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    await user_service.require_admin_identity(db, identity)
    users = await user_service.list_users(db)
    return [UserResponse.model_validate(u).to_wire() for u in users]


@router.get("/users/{user_id}")
async def get_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    viewer: Identity | None = Depends(get_optional_identity),
):
    user = await user_service.get_user_or_404(db, user_id)
    document = UserResponse.model_validate(user).to_wire()
    full_view = (
        viewer is not None and viewer.email == user.email
    ) or await user_service.is_admin(db, viewer)
    return project_profile(document, full_view)


@router.patch("/users/{user_id}")
async def update_user(
    user_id: UUID,
    body: UserUpdate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    user = await user_service.update_user(db, user_id, body, identity)
    return UserResponse.model_validate(user).to_wire()


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    deleted = await user_service.delete_user(db, user_id, identity)
    return {"deletedCount": deleted}


@router.get("/user-stats/{email}")
async def user_stats(
    email: str,
    db: AsyncSession = Depends(get_db),
    viewer: Identity | None = Depends(get_optional_identity),
):
    return await stats_service.user_profile(db, email, viewer)
