"""Status Transition Enforcement — lifecycle graphs for applications and tuitions.

Invariants:
    - APPLICATION_TRANSITIONS / TUITION_TRANSITIONS are the single source of truth
    - No edge leads back to Pending/pending
    - paid -> paid is allowed (re-payment keeps the terminal state)
    - Manual application updates may only reject; paid and terminated have their own operations
    - Pure: functions return the parsed target status or raise, never touch the store

Design Decisions:
    - Unknown status strings are InvalidInputError (400), illegal edges are
      InvalidTransitionError (409): the caller can tell a typo from a rule
"""

from etuition.core.domain_types import ApplicationStatus, TuitionStatus
from etuition.core.errors import InvalidInputError, InvalidTransitionError


APPLICATION_TRANSITIONS: dict[ApplicationStatus, frozenset[ApplicationStatus]] = {
    ApplicationStatus.PENDING: frozenset({
        ApplicationStatus.PAID,
        ApplicationStatus.REJECTED,
        ApplicationStatus.TERMINATED,
    }),
    ApplicationStatus.PAID: frozenset({
        ApplicationStatus.PAID,
        ApplicationStatus.TERMINATED,
    }),
    ApplicationStatus.REJECTED: frozenset({ApplicationStatus.TERMINATED}),
    ApplicationStatus.TERMINATED: frozenset(),
}

MANUAL_APPLICATION_TARGETS: frozenset[ApplicationStatus] = frozenset({
    ApplicationStatus.REJECTED,
})

TUITION_TRANSITIONS: dict[TuitionStatus, frozenset[TuitionStatus]] = {
    TuitionStatus.PENDING: frozenset({
        TuitionStatus.APPROVED,
        TuitionStatus.REJECTED,
    }),
    TuitionStatus.APPROVED: frozenset(),
    TuitionStatus.REJECTED: frozenset(),
}


def parse_application_status(value: str) -> ApplicationStatus:
    """Map a stored or caller-supplied string onto ApplicationStatus."""
    for status in ApplicationStatus:
        # stored rows use "Pending", callers often send "pending"
        if value == status.value or value.lower() == status.value.lower():
            return status
    raise InvalidInputError(f"Unknown application status '{value}'", "status")


def parse_tuition_status(value: str) -> TuitionStatus:
    try:
        return TuitionStatus(value.lower())
    except ValueError:
        raise InvalidInputError(f"Unknown tuition status '{value}'", "status")


def check_application_transition(
    current: str, target: ApplicationStatus,
) -> ApplicationStatus:
    """Raise InvalidTransitionError unless current -> target is an edge."""
    current_status = parse_application_status(current)
    if target not in APPLICATION_TRANSITIONS[current_status]:
        raise InvalidTransitionError(
            "Application", current_status.value, target.value,
        )
    return target


def check_manual_application_update(current: str, requested: str) -> ApplicationStatus:
    """Validate a caller-driven status update (reject only)."""
    target = parse_application_status(requested)
    if target not in MANUAL_APPLICATION_TARGETS:
        raise InvalidTransitionError(
            "Application", current, target.value,
        )
    return check_application_transition(current, target)


def check_tuition_transition(current: str, requested: str) -> TuitionStatus:
    """Validate an admin moderation decision on a tuition."""
    target = parse_tuition_status(requested)
    current_status = parse_tuition_status(current)
    if target not in TUITION_TRANSITIONS[current_status]:
        raise InvalidTransitionError(
            "Tuition", current_status.value, target.value,
        )
    return target
