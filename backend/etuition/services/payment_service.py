"""Payment Service — charge intents and transactional payment settlement.

Invariants:
    - Charge amount is the salary in minor units, rounded half-up
    - Only the application's student may settle it
    - Payment insert and the application's move to paid commit in ONE transaction
    - Transient store failures (OperationalError) are retried with backoff; the
      whole transaction is replayed from a clean rollback each time
    - Re-paying a paid application succeeds and leaves it paid

Design Decisions:
    - Tutor email and salary come from the stored application, not the request body
    - Response keeps the {paymentResult, updateResult} shape existing clients read
"""

import asyncio
import logging
import math
import random
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

from sqlalchemy import or_, select
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from etuition.core.access_policy import require_owner
from etuition.core.domain_types import ApplicationStatus, Identity
from etuition.core.errors import (
    DatabaseError, ErrorContext, ForbiddenError, InvalidInputError,
    ResourceNotFoundError,
)
from etuition.core.provider_protocols import ChargeIntentProvider
from etuition.core.status_transitions import check_application_transition
from etuition.models.application import Application
from etuition.models.payment import Payment
from etuition.schemas.payment import PaymentCreate

logger = logging.getLogger(__name__)


def parse_salary(raw: float | str | None) -> float:
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise InvalidInputError("Invalid Salary", "salary")
    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError("Invalid Salary", "salary")
    return value


def to_minor_units(amount: float) -> int:
    """12.345 -> 1235. Decimal avoids float artefacts like 1234.4999."""
    try:
        cents = Decimal(str(amount)).scaleb(2)
    except InvalidOperation:
        raise InvalidInputError("Invalid Salary", "salary")
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


async def create_charge_intent(
    provider: ChargeIntentProvider, raw_salary: float | str | None, currency: str,
) -> str:
    amount = to_minor_units(parse_salary(raw_salary))
    if amount < 1:
        # rounds below one cent
        raise InvalidInputError("Invalid Salary", "salary")
    return await provider.create_charge_intent(amount, currency)


async def _write_settlement(
    db: AsyncSession, body: PaymentCreate, identity: Identity,
) -> dict:
    application = await db.get(Application, body.app_id)
    if not application:
        raise ResourceNotFoundError("Application", str(body.app_id))
    if application.student_email != identity.email:
        raise ForbiddenError("Only the hiring student can pay for this application")
    if application.salary is None:
        raise InvalidInputError("Application has no salary", "salary")

    previous = application.status
    check_application_transition(previous, ApplicationStatus.PAID)

    payment = Payment(
        app_id=application.id,
        tutor_email=application.tutor_email,
        student_email=application.student_email,
        salary=application.salary,
        transaction_id=body.transaction_id,
    )
    db.add(payment)
    application.status = ApplicationStatus.PAID.value
    await db.commit()

    return {
        "paymentResult": {"insertedId": str(payment.id)},
        "updateResult": {
            "matchedCount": 1,
            "modifiedCount": int(previous != ApplicationStatus.PAID.value),
        },
    }


async def settle_payment(
    db: AsyncSession,
    body: PaymentCreate,
    identity: Identity,
    *,
    max_retries: int = 3,
    base_delay_ms: int = 200,
    max_delay_ms: int = 5_000,
) -> dict:
    """Record a payment and mark its application paid, atomically, with retry."""
    context = ErrorContext(user_email=identity.email, resource_id=str(body.app_id))
    for attempt in range(max_retries + 1):
        try:
            result = await _write_settlement(db, body, identity)
            logger.info(
                "Payment settled",
                extra={
                    "app_id": str(body.app_id),
                    "user_email": identity.email,
                    "attempt": attempt + 1,
                },
            )
            return result
        except OperationalError as e:
            await db.rollback()
            if attempt >= max_retries:
                logger.error(f"Settlement failed after retries: {e}")
                raise DatabaseError(
                    "Payment could not be recorded", "commit", context=context,
                )
            delay = _backoff(attempt, base_delay_ms, max_delay_ms)
            logger.warning(
                f"Transient settlement error, retry after {delay}ms",
                extra={"app_id": str(body.app_id), "attempt": attempt + 1},
            )
            await asyncio.sleep(delay / 1000)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Settlement failed: {e}", exc_info=True)
            raise DatabaseError(
                "Payment could not be recorded", "commit", context=context,
            )
    raise DatabaseError("Payment could not be recorded", "commit", context=context)


def _backoff(attempt: int, base_delay_ms: int, max_delay_ms: int) -> int:
    """Exponential backoff with ±25% jitter."""
    delay = min(max_delay_ms, (2 ** attempt) * base_delay_ms)
    return int(delay * random.uniform(0.75, 1.25))  # nosec B311


async def list_payments_for(
    db: AsyncSession, email: str, identity: Identity,
) -> list[Payment]:
    """Payment history where the caller is either side."""
    require_owner(identity, email)
    result = await db.execute(
        select(Payment)
        .where(or_(Payment.student_email == email, Payment.tutor_email == email))
        .order_by(Payment.date.desc()),
    )
    return list(result.scalars().all())
