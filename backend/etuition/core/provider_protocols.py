"""Boundary Protocols — contracts between core and the external providers.

Invariants:
    - Core NEVER imports provider SDKs — dependency arrows point inward only
    - Implementations provided by infrastructure via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Narrow surface: one call per provider, their wire protocols stay opaque
"""

from typing import Protocol


class ChargeIntentProvider(Protocol):
    """Card-processing provider: opens a charge and hands back its client secret."""
    async def create_charge_intent(
        self, amount_minor_units: int, currency: str,
    ) -> str: ...


class IdentityProvider(Protocol):
    """External identity provider: verifies a sign-in proof, returns its email."""
    async def verify_id_token(self, id_token: str) -> str: ...
