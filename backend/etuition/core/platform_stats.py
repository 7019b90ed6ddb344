"""Platform Stats — pure aggregate computations for dashboards and analytics.

Invariants:
    - All inputs are plain values already read from the store (no IO, no DB)
    - Returns flat dicts keyed by wire names (serializable as JSON)
    - Empty inputs produce zeros, never errors
    - Platform revenue is a fixed commission over the full payment volume

Design Decisions:
    - Pure functions, not ORM methods: stats are presentation, the store is persistence
"""

from collections.abc import Iterable


DEFAULT_COMMISSION_RATE: float = 0.20


def sum_salaries(salaries: Iterable[float | None]) -> float:
    return float(sum(s or 0 for s in salaries))


def platform_revenue(
    salaries: Iterable[float | None], rate: float = DEFAULT_COMMISSION_RATE,
) -> float:
    """Commission earned by the platform over every recorded payment."""
    return round(sum_salaries(salaries) * rate, 2)


def compute_admin_stats(
    total_users: int, total_tuitions: int, salaries: Iterable[float | None],
) -> dict:
    return {
        "totalUsers": total_users,
        "totalTuitions": total_tuitions,
        "totalPlatformEarnings": sum_salaries(salaries),
    }


def compute_tutor_stats(
    application_statuses: list[str], earnings: Iterable[float | None],
) -> dict:
    return {
        "applicationCount": len(application_statuses),
        "ongoingCount": sum(1 for s in application_statuses if s == "paid"),
        "totalEarnings": sum_salaries(earnings),
    }


def compute_student_stats(tuitions_posted: int, payments_made: int) -> dict:
    return {
        "tuitionsPosted": tuitions_posted,
        "totalPaid": payments_made,
    }


def compute_analytics(
    salaries: list[float | None],
    users_by_role: dict[str, int],
    tuitions_by_status: dict[str, int],
    rate: float = DEFAULT_COMMISSION_RATE,
) -> dict:
    """Admin analytics page: volume, commission, and breakdowns."""
    return {
        "totalTransactionVolume": sum_salaries(salaries),
        "platformRevenue": platform_revenue(salaries, rate),
        "totalPayments": len(salaries),
        "totalUsers": sum(users_by_role.values()),
        "usersByRole": dict(users_by_role),
        "tuitionsByStatus": dict(tuitions_by_status),
    }
