"""Authorization Guard — FastAPI dependencies that turn a bearer header into an Identity.

Invariants:
    - Missing header -> UnauthenticatedError (401)
    - Failed verification -> UnauthenticatedError (401), reason kept in the message
    - The guard never decides ownership; that is each operation's 403 to raise
    - get_optional_identity never raises: mixed routes degrade to anonymous

Design Decisions:
    - HTTPBearer(auto_error=False): lets the guard own the 401 body shape
"""

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from etuition.core.domain_types import Identity
from etuition.core.errors import InvalidCredentialError, UnauthenticatedError
from etuition.infrastructure.identity_tokens import TokenService, get_token_service

logger = logging.getLogger(__name__)
bearer_scheme = HTTPBearer(auto_error=False)


async def get_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    if credentials is None:
        raise UnauthenticatedError("Unauthorized access: No token provided")
    try:
        return tokens.verify(credentials.credentials)
    except InvalidCredentialError as e:
        raise UnauthenticatedError(f"Unauthorized access: {e.message}")


async def get_optional_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> Identity | None:
    if credentials is None:
        return None
    try:
        return tokens.verify(credentials.credentials)
    except InvalidCredentialError as e:
        logger.debug(f"Ignoring bad credential on public route: {e.reason}")
        return None
