"""Resilient Stripe Client — wraps the Stripe SDK with retry, backoff, and error mapping.

Invariants:
    - Rate limits and connection errors: exponential backoff with jitter, max retries
    - Card/request errors: immediate failure, no retry
    - All failures mapped to PaymentProviderError (core/errors.py)
    - Provider messages and keys never reach the client response

Design Decisions:
    - Wrapper over raw client: isolates retry logic from the payment routes
    - Sync SDK call run in a worker thread: keeps the event loop free
    - ±25% jitter on backoff: prevents thundering herd on shared rate limits
"""

import asyncio
import logging
import random

import stripe

from etuition.core.errors import PaymentProviderError

logger = logging.getLogger(__name__)


class StripeChargeProvider:
    """Creates card PaymentIntents and returns their client secret."""

    def __init__(
        self,
        api_key: str,
        max_retries: int = 3,
        base_delay_ms: int = 200,
        max_delay_ms: int = 5_000,
    ):
        self.client = stripe.StripeClient(api_key)
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def create_charge_intent(
        self, amount_minor_units: int, currency: str,
    ) -> str:
        params = {
            "amount": amount_minor_units,
            "currency": currency,
            "payment_method_types": ["card"],
        }
        for attempt in range(self.max_retries + 1):
            try:
                intent = await asyncio.to_thread(
                    self.client.payment_intents.create, params=params,
                )
                logger.info(
                    "Charge intent created", extra={"attempt": attempt + 1},
                )
                return intent.client_secret

            except (stripe.RateLimitError, stripe.APIConnectionError) as e:
                await self._handle_transient_error(e, attempt)

            except stripe.CardError as e:
                raise PaymentProviderError(
                    "Card was declined", e.code or "card_error",
                )

            except stripe.StripeError as e:
                logger.error(f"Stripe error: {e}", exc_info=True)
                raise PaymentProviderError(
                    "Could not create charge intent", type(e).__name__,
                )

        raise PaymentProviderError("Could not create charge intent", "exhausted")

    async def _handle_transient_error(self, e: Exception, attempt: int) -> None:
        if attempt >= self.max_retries:
            raise PaymentProviderError(
                f"Transient failure after {self.max_retries} retries",
                "connection_error",
            )
        delay = self._backoff(attempt)
        logger.warning(
            f"Stripe transient error, retry after {delay}ms: {type(e).__name__}",
            extra={"attempt": attempt + 1},
        )
        await asyncio.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311


# Singleton (initialized on startup)
charge_provider: StripeChargeProvider | None = None


def init_charge_provider(api_key: str, **kwargs) -> None:
    global charge_provider
    charge_provider = StripeChargeProvider(api_key, **kwargs)


def get_charge_provider() -> StripeChargeProvider:
    """FastAPI dependency for the charge provider."""
    if not charge_provider:
        raise RuntimeError("Charge provider not initialized")
    return charge_provider
