"""Stripe Charge Provider — verifies retry, error mapping, and request shape.

Tests:
    - Intent created for card payments with amount in minor units
    - Connection errors are retried, then succeed
    - Retries exhausted -> PaymentProviderError
    - Card errors fail immediately without retry
    - Backoff stays within ±25% of the capped exponential delay
"""

from types import SimpleNamespace

import pytest
import stripe

from etuition.core.errors import PaymentProviderError
from etuition.infrastructure.payment_provider import StripeChargeProvider


def _provider_with(create, **kwargs) -> StripeChargeProvider:
    kwargs.setdefault("base_delay_ms", 0)
    provider = StripeChargeProvider("sk_test_unit", **kwargs)
    provider.client = SimpleNamespace(payment_intents=SimpleNamespace(create=create))
    return provider


async def test_creates_card_intent_and_returns_secret():
    seen = []

    def create(params):
        seen.append(params)
        return SimpleNamespace(client_secret="pi_1_secret_abc")

    secret = await _provider_with(create).create_charge_intent(123450, "usd")
    assert secret == "pi_1_secret_abc"
    assert seen == [{
        "amount": 123450, "currency": "usd", "payment_method_types": ["card"],
    }]


async def test_connection_error_is_retried():
    attempts = []

    def create(params):
        attempts.append(1)
        if len(attempts) < 3:
            raise stripe.APIConnectionError("network down")
        return SimpleNamespace(client_secret="ok")

    assert await _provider_with(create).create_charge_intent(100, "usd") == "ok"
    assert len(attempts) == 3


async def test_retries_exhausted():
    attempts = []

    def create(params):
        attempts.append(1)
        raise stripe.RateLimitError("slow down")

    with pytest.raises(PaymentProviderError) as exc:
        await _provider_with(create, max_retries=2).create_charge_intent(100, "usd")
    assert exc.value.provider_error_type == "connection_error"
    assert len(attempts) == 3


async def test_card_error_not_retried():
    attempts = []

    def create(params):
        attempts.append(1)
        raise stripe.CardError("declined", "card", "card_declined")

    with pytest.raises(PaymentProviderError) as exc:
        await _provider_with(create).create_charge_intent(100, "usd")
    assert exc.value.provider_error_type == "card_declined"
    assert len(attempts) == 1


async def test_other_stripe_error_mapped():
    def create(params):
        raise stripe.AuthenticationError("bad key")

    with pytest.raises(PaymentProviderError) as exc:
        await _provider_with(create).create_charge_intent(100, "usd")
    assert "bad key" not in exc.value.message


def test_backoff_bounds():
    provider = StripeChargeProvider(
        "sk_test_unit", base_delay_ms=100, max_delay_ms=1_000,
    )
    for attempt in range(6):
        expected = min(1_000, (2 ** attempt) * 100)
        delay = provider._backoff(attempt)
        assert int(expected * 0.75) <= delay <= int(expected * 1.25)
