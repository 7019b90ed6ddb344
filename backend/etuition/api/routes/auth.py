"""Auth Routes — bearer token issuance.

Invariants:
    - A token is issued for the requested email (plus optional role claim)
    - With require_identity_proof on, the body must carry an identity-provider
      ID token whose verified email equals the requested one
"""

import logging

from fastapi import APIRouter, Depends

from etuition.config import Settings, get_settings
from etuition.core.errors import ForbiddenError, InvalidInputError
from etuition.core.provider_protocols import IdentityProvider
from etuition.infrastructure.identity_provider import get_identity_provider
from etuition.infrastructure.identity_tokens import TokenService, get_token_service
from etuition.schemas.auth import TokenRequest

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])


@router.post("/jwt")
async def issue_token(
    body: TokenRequest,
    settings: Settings = Depends(get_settings),
    tokens: TokenService = Depends(get_token_service),
):
    if settings.require_identity_proof:
        if not body.id_token:
            raise InvalidInputError("Identity proof required", "idToken")
        provider: IdentityProvider = get_identity_provider()
        verified_email = await provider.verify_id_token(body.id_token)
        if verified_email != body.email:
            raise ForbiddenError("Identity proof does not match email")
    token = tokens.issue({"email": body.email, "role": body.role})
    logger.info("Token issued", extra={"user_email": body.email})
    return {"token": token}
