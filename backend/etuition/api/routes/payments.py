"""Payment Routes — charge intents, settlement, and payment history."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from etuition.api.deps import get_identity
from etuition.config import get_settings
from etuition.core.domain_types import Identity
from etuition.core.provider_protocols import ChargeIntentProvider
from etuition.infrastructure.database import get_db
from etuition.infrastructure.payment_provider import get_charge_provider
from etuition.schemas.payment import (
    ChargeIntentRequest, PaymentCreate, PaymentResponse,
)
from etuition.services import payment_service

router = APIRouter(tags=["payments"])


@router.post("/create-payment-intent")
async def create_payment_intent(
    body: ChargeIntentRequest,
    identity: Identity = Depends(get_identity),
    provider: ChargeIntentProvider = Depends(get_charge_provider),
):
    client_secret = await payment_service.create_charge_intent(
        provider, body.salary, get_settings().payment_currency,
    )
    return {"clientSecret": client_secret}


@router.post("/payments", status_code=status.HTTP_201_CREATED)
async def record_payment(
    body: PaymentCreate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    settings = get_settings()
    return await payment_service.settle_payment(
        db, body, identity,
        max_retries=settings.payment_max_retries,
        base_delay_ms=settings.payment_base_delay_ms,
        max_delay_ms=settings.payment_max_delay_ms,
    )


@router.get("/payments/{email}")
async def payment_history(
    email: str,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    payments = await payment_service.list_payments_for(db, email, identity)
    return [PaymentResponse.model_validate(p).to_wire() for p in payments]
