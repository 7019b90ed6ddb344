"""Firebase Identity Provider — verifies best-effort init and token verification.

Tests:
    - Missing or broken service key leaves the provider uninitialized
    - get_identity_provider raises IdentityProviderError when uninitialized
    - Rejected ID tokens and email-less tokens raise InvalidCredentialError
"""

import pytest

import etuition.infrastructure.identity_provider as provider_module
from etuition.core.errors import IdentityProviderError, InvalidCredentialError
from etuition.infrastructure.identity_provider import (
    FirebaseIdentityProvider, get_identity_provider, init_identity_provider,
)


@pytest.fixture(autouse=True)
def reset_provider(monkeypatch):
    monkeypatch.setattr(provider_module, "identity_provider", None)


def test_init_without_key_is_noop():
    init_identity_provider(None)
    with pytest.raises(IdentityProviderError):
        get_identity_provider()


def test_init_with_broken_key_is_not_fatal():
    init_identity_provider("definitely-not-base64-json")
    assert provider_module.identity_provider is None


async def test_verify_returns_email(monkeypatch):
    monkeypatch.setattr(
        provider_module.auth, "verify_id_token",
        lambda token, app=None: {"email": "a@x.com", "uid": "u1"},
    )
    provider = FirebaseIdentityProvider(app=None)
    assert await provider.verify_id_token("id-token") == "a@x.com"


async def test_verify_rejected_token(monkeypatch):
    def reject(token, app=None):
        raise ValueError("bad token")

    monkeypatch.setattr(provider_module.auth, "verify_id_token", reject)
    with pytest.raises(InvalidCredentialError):
        await FirebaseIdentityProvider(app=None).verify_id_token("id-token")


async def test_verify_token_without_email(monkeypatch):
    monkeypatch.setattr(
        provider_module.auth, "verify_id_token",
        lambda token, app=None: {"uid": "u1"},
    )
    with pytest.raises(InvalidCredentialError):
        await FirebaseIdentityProvider(app=None).verify_id_token("id-token")
