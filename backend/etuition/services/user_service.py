"""User Service — account creation, role lookup, and admin user management.

Invariants:
    - At most one user per email: pre-insert lookup plus the unique constraint
    - Caller roles are always read from the store (or the super-admin constant)
    - Role changes require an admin; profile edits require the owner or an admin
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from etuition.config import get_settings
from etuition.core.access_policy import require_admin, resolve_role
from etuition.core.domain_types import Identity, Role
from etuition.core.errors import ForbiddenError, ResourceNotFoundError
from etuition.models.user import User
from etuition.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


async def find_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def role_for_email(db: AsyncSession, email: str) -> Role:
    """Role lookup. The super-admin email never touches the store."""
    super_admin = get_settings().super_admin_email
    if email == super_admin:
        return Role.ADMIN
    user = await find_user_by_email(db, email)
    return resolve_role(email, user.role if user else None, super_admin)


async def is_admin(db: AsyncSession, identity: Identity | None) -> bool:
    if identity is None:
        return False
    return await role_for_email(db, identity.email) is Role.ADMIN


async def require_admin_identity(db: AsyncSession, identity: Identity) -> None:
    require_admin(await role_for_email(db, identity.email))


async def create_user(db: AsyncSession, body: UserCreate) -> tuple[User, bool]:
    """Insert unless the email exists. Returns (user, created)."""
    existing = await find_user_by_email(db, body.email)
    if existing:
        return existing, False
    user = User(**body.model_dump(by_alias=False))
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # concurrent insert of the same email won the race
        await db.rollback()
        existing = await find_user_by_email(db, body.email)
        if existing is None:
            raise
        return existing, False
    await db.refresh(user)
    logger.info("User created", extra={"user_email": user.email})
    return user, True


async def get_user_or_404(db: AsyncSession, user_id: UUID) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise ResourceNotFoundError("User", str(user_id))
    return user


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.created_at.desc()))
    return list(result.scalars().all())


async def update_user(
    db: AsyncSession, user_id: UUID, body: UserUpdate, identity: Identity,
) -> User:
    user = await get_user_or_404(db, user_id)
    caller_is_admin = await is_admin(db, identity)
    changes = body.model_dump(exclude_unset=True, by_alias=False)

    if "role" in changes and not caller_is_admin:
        raise ForbiddenError("Only an admin can change roles")
    if not caller_is_admin and user.email != identity.email:
        raise ForbiddenError()

    for key, value in changes.items():
        setattr(user, key, value)
    await db.commit()
    await db.refresh(user)
    if "role" in changes:
        logger.info(
            f"Role changed to {user.role}", extra={"user_email": user.email},
        )
    return user


async def delete_user(db: AsyncSession, user_id: UUID, identity: Identity) -> int:
    await require_admin_identity(db, identity)
    user = await db.get(User, user_id)
    if not user:
        return 0
    await db.delete(user)
    await db.commit()
    logger.info("User deleted", extra={"user_email": user.email})
    return 1
