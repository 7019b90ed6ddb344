"""Identity Token Service — issues and verifies signed, time-bounded bearer tokens.

Invariants:
    - Every issued token carries email (also as sub), iat and exp
    - verify() is a pure check: no store lookups, no side effects
    - Expired, tampered, foreign-key, and email-less tokens all fail with InvalidCredentialError
    - No revocation and no refresh: a token is valid until exp

Design Decisions:
    - HS256 via python-jose: shared-secret signing, one secret from settings
    - role claim is copied through for clients but never used for authorization
"""

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache

from jose import ExpiredSignatureError, JWTError, jwt

from etuition.config import get_settings
from etuition.core.domain_types import Identity
from etuition.core.errors import InvalidCredentialError, InvalidInputError

logger = logging.getLogger(__name__)


class TokenService:
    """Signs and verifies bearer tokens for an email identity."""

    def __init__(
        self, secret: str, algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=1),
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl

    def issue(self, identity: dict) -> str:
        email = identity.get("email")
        if not email:
            raise InvalidInputError("Email required", "email")
        now = datetime.now(timezone.utc)
        claims = {
            "email": email,
            "sub": email,
            "iat": now,
            "exp": now + self._ttl,
        }
        if identity.get("role"):
            claims["role"] = identity["role"]
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Identity:
        try:
            payload = jwt.decode(
                token, self._secret, algorithms=[self._algorithm],
            )
        except ExpiredSignatureError:
            raise InvalidCredentialError("expired")
        except JWTError as e:
            logger.debug(f"Token rejected: {e}")
            raise InvalidCredentialError("malformed or wrongly signed")
        email = payload.get("email") or payload.get("sub")
        if not email:
            raise InvalidCredentialError("missing email claim")
        return Identity(email=email, role=payload.get("role"))


@lru_cache
def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(
        settings.access_token_secret,
        algorithm=settings.access_token_algorithm,
        ttl=timedelta(minutes=settings.access_token_ttl_minutes),
    )
