"""Access Policy — which caller may see or change which record, as pure functions.

Invariants:
    - Owner-scoped operations compare the VERIFIED identity email to the target;
      path/body emails are never trusted on their own
    - No admin override on owner-scoped reads
    - The super-admin email always resolves to admin without a store lookup
    - Public profile projection never includes fields outside PUBLIC_PROFILE_FIELDS
    - Only approved tuitions are visible to callers who are neither owner nor admin

Design Decisions:
    - Role resolution takes the stored role as an argument: services do the IO,
      this module decides (ADR: functional core, imperative shell)
"""

from etuition.core.domain_types import Identity, Role, TuitionStatus
from etuition.core.errors import ForbiddenError


PUBLIC_PROFILE_FIELDS: tuple[str, ...] = (
    "name", "email", "image", "role", "phone",
    "address", "institution", "class", "gender",
)


def resolve_role(
    email: str, stored_role: str | None, super_admin_email: str,
) -> Role:
    """Role for an email. Missing or unknown stored roles default to student."""
    if email == super_admin_email:
        return Role.ADMIN
    try:
        return Role(stored_role) if stored_role else Role.STUDENT
    except ValueError:
        return Role.STUDENT


def require_owner(identity: Identity, target_email: str) -> None:
    if identity.email != target_email:
        raise ForbiddenError()


def require_admin(role: Role) -> None:
    if role is not Role.ADMIN:
        raise ForbiddenError("Admin access required")


def require_role(role: Role, expected: Role) -> None:
    if role is not expected:
        raise ForbiddenError(f"Only a {expected.value} can do this")


def project_profile(document: dict, is_owner: bool) -> dict:
    """Full document for the owner, public subset for everyone else."""
    if is_owner:
        return dict(document)
    return {k: document.get(k) for k in PUBLIC_PROFILE_FIELDS}


def can_view_tuition(
    tuition_status: str, tuition_owner: str,
    viewer: Identity | None, viewer_is_admin: bool,
) -> bool:
    if tuition_status == TuitionStatus.APPROVED.value:
        return True
    if viewer_is_admin:
        return True
    return viewer is not None and viewer.email == tuition_owner


def tuition_listing_statuses(
    student_email: str | None, viewer: Identity | None, viewer_is_admin: bool,
) -> list[TuitionStatus] | None:
    """Statuses a listing may include. None means no status restriction."""
    if student_email is None:
        return [TuitionStatus.APPROVED]
    if viewer_is_admin or (viewer is not None and viewer.email == student_email):
        return None
    return [TuitionStatus.APPROVED]


def is_party(identity: Identity, tutor_email: str, student_email: str) -> bool:
    return identity.email in (tutor_email, student_email)


def require_party(identity: Identity, tutor_email: str, student_email: str) -> None:
    if not is_party(identity, tutor_email, student_email):
        raise ForbiddenError()


def counterpart_email(identity: Identity, tutor_email: str, student_email: str) -> str:
    """The other side of a contract, as seen by one of its parties."""
    return student_email if identity.email == tutor_email else tutor_email
