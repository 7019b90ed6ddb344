"""Identity Tokens — verifies issue/verify behavior of the bearer token service.

Tests:
    - Issued tokens verify back to the same email (and role claim)
    - Expired, foreign-key, malformed, and email-less tokens raise InvalidCredentialError
    - Issuing without an email raises InvalidInputError
"""

from datetime import timedelta

import pytest
from jose import jwt

from etuition.core.errors import InvalidCredentialError, InvalidInputError
from etuition.infrastructure.identity_tokens import TokenService

SECRET = "unit-test-secret"


def test_issue_then_verify_roundtrip():
    service = TokenService(SECRET)
    identity = service.verify(service.issue({"email": "a@x.com", "role": "tutor"}))
    assert identity.email == "a@x.com"
    assert identity.role == "tutor"


def test_claims_include_sub_iat_exp():
    token = TokenService(SECRET).issue({"email": "a@x.com"})
    claims = jwt.get_unverified_claims(token)
    assert claims["sub"] == "a@x.com"
    assert claims["exp"] > claims["iat"]
    assert "role" not in claims


def test_issue_without_email_refused():
    with pytest.raises(InvalidInputError):
        TokenService(SECRET).issue({"role": "student"})


def test_expired_token_refused():
    service = TokenService(SECRET, ttl=timedelta(seconds=-5))
    token = service.issue({"email": "a@x.com"})
    with pytest.raises(InvalidCredentialError) as exc:
        service.verify(token)
    assert exc.value.reason == "expired"


def test_token_signed_with_other_key_refused():
    token = TokenService("other-secret").issue({"email": "a@x.com"})
    with pytest.raises(InvalidCredentialError) as exc:
        TokenService(SECRET).verify(token)
    assert exc.value.http_status == 401


def test_malformed_token_refused():
    with pytest.raises(InvalidCredentialError):
        TokenService(SECRET).verify("not.a.token")


def test_token_without_email_claim_refused():
    token = jwt.encode({"role": "admin"}, SECRET, algorithm="HS256")
    with pytest.raises(InvalidCredentialError) as exc:
        TokenService(SECRET).verify(token)
    assert exc.value.reason == "missing email claim"
